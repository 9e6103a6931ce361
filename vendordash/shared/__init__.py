"""Shared building blocks used by more than one feature."""

from vendordash.shared.models import TimestampMixin

__all__ = ["TimestampMixin"]
