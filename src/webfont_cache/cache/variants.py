"""
Variant Resolution Cache
========================

Three-tier lookup (memory, disk, remote) of the variant URLs of a font bundle.
Remote results are written through to both lower tiers; disk failures never
reach the caller.
"""

import asyncio
import json
import logging

from pydantic import ValidationError as PydanticValidationError

from ..core.models import FontBundle, VariantItem, VariantItemList
from ..fetchers.protocols import VariantURLFetcher
from .dedup import KeyedExecutor
from .memory import MemoryStore
from .paths import CachePaths

logger = logging.getLogger(__name__)

MEMORY_NAMESPACE = "variants"


class VariantCache:
    """Resolve and cache the variant list of font bundles."""

    def __init__(
        self,
        paths: CachePaths,
        fetcher: VariantURLFetcher,
        memory: MemoryStore | None = None,
        executor: KeyedExecutor | None = None,
    ):
        self.paths = paths
        self.fetcher = fetcher
        self.memory = memory if memory is not None else MemoryStore()
        self.executor = executor if executor is not None else KeyedExecutor()

    async def resolve(self, bundle: FontBundle) -> list[VariantItem] | None:
        """Return the variants of ``bundle`` or None when upstream cannot resolve it."""
        return await self.executor.run(
            f"resolveVariants__{bundle.store_id}", lambda: self._resolve(bundle)
        )

    async def _resolve(self, bundle: FontBundle) -> list[VariantItem] | None:
        store_id = bundle.store_id

        stored = self.memory.get(MEMORY_NAMESPACE, store_id)
        if stored is not None:
            logger.debug(f"Memory hit for variants of {store_id}")
            return stored

        cached = await self.read_disk(store_id)
        if cached is not None:
            logger.debug(f"Disk hit for variants of {store_id}")
            self.memory.set(MEMORY_NAMESPACE, store_id, cached)
            return cached

        font = bundle.font
        logger.info(f"Fetching variant URLs for {store_id}")
        variant_items = await self.fetcher.fetch_variant_urls(
            font.family, list(font.variants), list(bundle.subsets)
        )

        if variant_items is None:
            logger.error(f"Variant resolution returned nothing for storeID={store_id}")
            return None

        self.memory.set(MEMORY_NAMESPACE, store_id, variant_items)
        await self.write_disk(store_id, variant_items)
        return variant_items

    async def read_disk(self, store_id: str) -> list[VariantItem] | None:
        """Read and validate the disk entry, treating every failure as a miss."""
        try:
            return await asyncio.to_thread(self._read_disk_sync, store_id)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading cached variant items for storeID={store_id}: {e}")
            return None

    def _read_disk_sync(self, store_id: str) -> list[VariantItem] | None:
        cache_file = self.paths.variants_file(store_id)
        if not cache_file.exists():
            return None

        raw = cache_file.read_text(encoding="utf-8")
        try:
            return VariantItemList.validate_python(json.loads(raw))
        except PydanticValidationError as e:
            logger.warning(
                f"Invalid cached variant items for storeID={store_id}, ignoring cache file: "
                f"{e.error_count()} validation error(s)"
            )
            return None

    async def write_disk(self, store_id: str, variant_items: list[VariantItem]) -> None:
        """Persist ``variant_items``; failures are logged and swallowed."""
        try:
            await asyncio.to_thread(self._write_disk_sync, store_id, variant_items)
        except (OSError, ValueError) as e:
            logger.error(f"Error storing cached variant items for storeID={store_id}: {e}")

    def _write_disk_sync(self, store_id: str, variant_items: list[VariantItem]) -> None:
        cache_file = self.paths.variants_file(store_id)
        payload = VariantItemList.dump_python(variant_items, mode="json", by_alias=True)
        cache_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info(f"Stored {len(variant_items)} variant items at {cache_file}")
