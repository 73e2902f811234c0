"""NLS services (configuration)."""
from .config_service import (
    clear_config_cache,
    get_logging_settings,
    get_storage_settings,
    load_config,
)

__all__ = [
    "clear_config_cache",
    "get_logging_settings",
    "get_storage_settings",
    "load_config",
]
