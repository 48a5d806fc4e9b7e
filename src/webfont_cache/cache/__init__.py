"""Cache Tiers
===========

Key-deduplicated memory/disk/remote resolution of variant lists, subset
archives and inline payloads, and version-based invalidation of the disk tier.
"""

from .archive import ArchiveCache, build_filtered_archive, select_files
from .dedup import KeyedExecutor
from .inline import Base64Cache
from .memory import MemoryStore
from .paths import CachePaths
from .sweeper import (
    CacheStats,
    CacheSweeper,
    SweepPlan,
    SweepResult,
    apply_sweep,
    cache_stats,
    clear_cache,
    plan_sweep,
    scan_versions,
)
from .variants import VariantCache

__all__ = [
    "ArchiveCache",
    "Base64Cache",
    "CachePaths",
    "CacheStats",
    "CacheSweeper",
    "KeyedExecutor",
    "MemoryStore",
    "SweepPlan",
    "SweepResult",
    "VariantCache",
    "apply_sweep",
    "build_filtered_archive",
    "cache_stats",
    "clear_cache",
    "plan_sweep",
    "scan_versions",
    "select_files",
]
