"""Value types decoded from the ``orders_detail`` column."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class LineItem(BaseModel):
    """One product + quantity entry embedded in an order."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1, description="Referenced product id.")
    quantity: int = Field(..., ge=0, description="Units ordered.")


_line_items_adapter: TypeAdapter[list[LineItem]] = TypeAdapter(list[LineItem])


class LineItemDecodeError(ValueError):
    """Raised when an ``orders_detail`` blob is not a line-item collection."""


def decode_line_items(raw: Any) -> list[LineItem]:
    """Decode an ``orders_detail`` value into line items.

    Accepts the JSON list form, a JSON-encoded string of it, or a single
    line-item object (older rows). ``None`` means no items.

    Args:
        raw: Column value as returned by the driver.

    Returns:
        Decoded line items.

    Raises:
        LineItemDecodeError: If the value does not describe line items.
    """
    if raw is None:
        return []
    try:
        if isinstance(raw, (str, bytes)):
            if not raw.strip():
                return []
            raw = TypeAdapter(Any).validate_json(raw)
        if isinstance(raw, dict):
            raw = [raw]
        return _line_items_adapter.validate_python(raw)
    except ValidationError as e:
        raise LineItemDecodeError(f"Invalid orders_detail: {e.error_count()} error(s)") from e
