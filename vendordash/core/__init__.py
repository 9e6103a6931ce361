"""Core infrastructure: config, database, logging, middleware, exceptions."""

from vendordash.core.config import Settings, get_settings
from vendordash.core.database import Base, get_db
from vendordash.core.exceptions import ConfigurationError, DataAccessError, VendorDashError
from vendordash.core.logging import get_logger, request_id_ctx

__all__ = [
    "Base",
    "ConfigurationError",
    "DataAccessError",
    "Settings",
    "VendorDashError",
    "get_db",
    "get_logger",
    "get_settings",
    "request_id_ctx",
]
