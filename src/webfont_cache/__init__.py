"""Web Font Cache
==============

Resolves, fetches and caches web font metadata and files: variant URLs per
subset selection, filtered subset archives and inline base64 payloads.
"""

__version__ = "1.0.0"

from .catalog import FontCatalog
from .core.config import CacheConfig
from .core.exceptions import NotFoundError, UpstreamError, WebfontCacheError
from .core.models import (
    FontBundle,
    FontFile,
    FontFormat,
    FontItem,
    FontSubsetArchive,
    VariantItem,
    VariantURL,
)
from .service import FontService

__all__ = [
    "CacheConfig",
    "FontBundle",
    "FontCatalog",
    "FontFile",
    "FontFormat",
    "FontItem",
    "FontService",
    "FontSubsetArchive",
    "NotFoundError",
    "UpstreamError",
    "VariantItem",
    "VariantURL",
    "WebfontCacheError",
]
