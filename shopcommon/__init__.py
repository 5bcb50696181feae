"""Common helpers shared across NextShop services."""

from .config import AppConfig, configure_logging, load_app_config
from .slugs import slugify
from .storage import JsonListStore, ListStore, MemoryListStore, ParseError, StoreError

__all__ = [
    "AppConfig",
    "configure_logging",
    "load_app_config",
    "slugify",
    "JsonListStore",
    "ListStore",
    "MemoryListStore",
    "ParseError",
    "StoreError",
]
