"""Deterministic on-disk locations for cached font data.

Every path is partitioned by ``{fontID}/{version}`` so a version bump lands in
a disjoint directory and old entries are left for the sweeper.
"""

from pathlib import Path

from ..core.models import FontFormat, StoreKey

VARIANTS_SUBDIR = "variants"
VARIANTS_SUFFIX = ".json"
BASE64_SUFFIX = ".base64"


class CachePaths:
    """Resolve cache file paths under a cache root, creating parent directories."""

    def __init__(self, cache_root: Path):
        self.cache_root = Path(cache_root)

    @property
    def variants_root(self) -> Path:
        return self.cache_root / VARIANTS_SUBDIR

    def font_dir(self, store_id: str) -> Path:
        key = StoreKey.parse(store_id)
        return self.variants_root / key.font_id / key.version

    def _ensure(self, target: Path) -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def variants_file(self, store_id: str) -> Path:
        """``{root}/variants/{fontID}/{version}/{storeID}.json``"""
        return self._ensure(self.font_dir(store_id) / f"{store_id}{VARIANTS_SUFFIX}")

    def base64_file(self, store_id: str, variant_id: str, font_format: FontFormat | str) -> Path:
        """``{root}/variants/{fontID}/{version}/{storeID}__{variantID}_{format}.base64``"""
        fmt = FontFormat(font_format).value
        return self._ensure(
            self.font_dir(store_id) / f"{store_id}__{variant_id}_{fmt}{BASE64_SUFFIX}"
        )
