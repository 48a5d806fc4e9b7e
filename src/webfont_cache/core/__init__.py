"""Core components for the web font cache."""

from .config import CacheConfig
from .exceptions import (
    CacheIOError,
    ConfigurationError,
    EmptyArchiveError,
    FontNotFoundError,
    NotFoundError,
    UpstreamError,
    UpstreamFetchError,
    ValidationError,
    WebfontCacheError,
)
from .models import (
    FontBundle,
    FontFile,
    FontFormat,
    FontItem,
    FontSubsetArchive,
    VariantItem,
    VariantURL,
)

__all__ = [
    "CacheConfig",
    "CacheIOError",
    "ConfigurationError",
    "EmptyArchiveError",
    "FontBundle",
    "FontFile",
    "FontFormat",
    "FontItem",
    "FontNotFoundError",
    "FontSubsetArchive",
    "NotFoundError",
    "UpstreamError",
    "UpstreamFetchError",
    "ValidationError",
    "VariantItem",
    "VariantURL",
    "WebfontCacheError",
]
