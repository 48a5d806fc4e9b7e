"""
Font Service
============

Entry point for API consumers: turns ``(fontID, subsets)`` requests into
font descriptions, filtered zip downloads, inline base64 payloads and local
copies, going through the resolution caches.
"""

import asyncio
import logging
from datetime import UTC, datetime

from .cache.archive import ArchiveCache, build_filtered_archive
from .cache.dedup import KeyedExecutor
from .cache.inline import Base64Cache
from .cache.memory import MemoryStore
from .cache.paths import CachePaths
from .cache.sweeper import CacheSweeper, SweepResult
from .cache.variants import VariantCache
from .catalog.store import FontCatalog
from .core.config import CacheConfig
from .core.exceptions import (
    FontNotFoundError,
    NoFontFormatError,
    VariantsNotFoundError,
)
from .core.models import (
    FORMAT_PRIORITY,
    APIFont,
    APIListFont,
    APIVariant,
    Base64Font,
    FontBundle,
    FontFormat,
    FontItem,
    FontSubsetArchive,
    LocalDownload,
    LocalFont,
    VariantItem,
)
from .fetchers.protocols import ArchiveFetcher, ByteFetcher, VariantURLFetcher

logger = logging.getLogger(__name__)

LOCAL_FONT_SUFFIXES = (".woff", ".woff2", ".ttf", ".eot", ".svg")
DEFAULT_LOCAL_FORMATS = ["woff2", "woff"]


class FontService:
    """Resolve fonts for API consumers through the cache tiers."""

    def __init__(
        self,
        catalog: FontCatalog,
        config: CacheConfig,
        variant_fetcher: VariantURLFetcher,
        archive_fetcher: ArchiveFetcher,
        byte_fetcher: ByteFetcher,
        memory: MemoryStore | None = None,
    ):
        self.catalog = catalog
        self.config = config
        self.byte_fetcher = byte_fetcher
        self.memory = memory if memory is not None else MemoryStore()
        self.paths = CachePaths(config.cache_root_dir)

        executor = KeyedExecutor()
        self.variants = VariantCache(self.paths, variant_fetcher, self.memory, executor)
        self.archives = ArchiveCache(archive_fetcher, self.memory, executor)
        self.base64 = Base64Cache(self.paths, byte_fetcher)
        self.sweeper = CacheSweeper(self.paths)

    # Catalog
    def list_fonts(self, sort: str = "popularity") -> list[APIListFont]:
        return [APIListFont.from_font(font) for font in self.catalog.sorted_items(sort)]

    def load_bundle(self, font_id: str, subsets: list[str] | None) -> FontBundle | None:
        return self.catalog.build_bundle(font_id, subsets)

    def reload_catalog(self, font_items: list[FontItem]) -> SweepResult:
        """Replace the catalog and reclaim cache entries it made stale."""
        self.catalog.replace(font_items)
        logger.info(f"Catalog reloaded with {len(font_items)} fonts")
        return self.sweeper.sweep(font_items)

    # Resolution
    async def load_variant_items(self, bundle: FontBundle) -> list[VariantItem] | None:
        return await self.variants.resolve(bundle)

    async def load_archive(
        self, bundle: FontBundle, variants: list[VariantItem]
    ) -> FontSubsetArchive:
        return await self.archives.resolve(bundle, variants)

    async def _require(
        self, font_id: str, subsets: list[str] | None
    ) -> tuple[FontBundle, list[VariantItem]]:
        bundle = self.load_bundle(font_id, subsets)
        if bundle is None:
            raise FontNotFoundError(font_id)
        variant_items = await self.load_variant_items(bundle)
        if not variant_items:
            raise VariantsNotFoundError(bundle.store_id)
        return bundle, variant_items

    async def describe_font(self, font_id: str, subsets: list[str] | None) -> APIFont | None:
        """Full font description with per-format URLs, or None if not resolvable."""
        bundle = self.load_bundle(font_id, subsets)
        if bundle is None:
            return None
        variant_items = await self.load_variant_items(bundle)
        if variant_items is None:
            return None

        font = bundle.font
        return APIFont(
            id=font.id,
            family=font.family,
            subsets=list(font.subsets),
            category=font.category,
            version=font.version,
            last_modified=font.last_modified,
            popularity=font.popularity,
            def_subset=font.def_subset,
            def_variant=font.def_variant,
            subset_map=self.catalog.subset_map(bundle),
            store_id="_".join(bundle.subsets),
            variants=[APIVariant.from_variant(variant) for variant in variant_items],
        )

    async def build_download(
        self,
        font_id: str,
        subsets: list[str] | None,
        variants: list[str] | None = None,
        formats: list[str] | None = None,
    ) -> tuple[str, bytes]:
        """Zip of the bundle's files restricted to ``variants`` and ``formats``."""
        bundle, variant_items = await self._require(font_id, subsets)
        archive = await self.load_archive(bundle, variant_items)
        return await build_filtered_archive(bundle.store_id, archive, variants, formats)

    async def load_base64_fonts(
        self,
        font_id: str,
        subsets: list[str] | None,
        variant_ids: list[str],
        font_format: str | None = None,
    ) -> list[Base64Font]:
        """Inline payloads of the requested variants in the best available format."""
        bundle, variant_items = await self._require(font_id, subsets)

        matched = [variant for variant in variant_items if variant.id and variant.id in variant_ids]
        if not matched:
            raise VariantsNotFoundError(bundle.store_id)

        if not font_format:
            priority = list(FORMAT_PRIORITY)
        else:
            try:
                priority = [FontFormat(font_format)]
            except ValueError as e:
                raise NoFontFormatError(",".join(variant.id for variant in matched)) from e

        fonts = []
        for variant in matched:
            url_info = next(
                (found for fmt in priority if (found := variant.url_for(fmt)) is not None), None
            )
            if url_info is None:
                raise NoFontFormatError(variant.id)

            fonts.append(
                Base64Font(
                    id=variant.id,
                    family=variant.font_family or bundle.font.family,
                    subset=",".join(bundle.subsets),
                    style=variant.font_style or "normal",
                    weight=variant.font_weight or "400",
                    base64=await self.base64.resolve(bundle, variant, url_info),
                )
            )
        return fonts

    # Local copies
    async def download_local(
        self,
        font_id: str,
        subsets: list[str] | None,
        variants: list[str] | None = None,
        formats: list[str] | None = None,
    ) -> LocalDownload:
        """Download the selected font files into ``local_fonts_dir/{font_id}``."""
        bundle, variant_items = await self._require(font_id, subsets)
        font_dir = self.config.local_fonts_dir / font_id
        await asyncio.to_thread(font_dir.mkdir, parents=True, exist_ok=True)

        selected = [v for v in variant_items if variants is None or v.id in variants]

        async def fetch_to(url: str, target) -> None:
            if await asyncio.to_thread(target.exists):
                return
            data = await self.byte_fetcher.fetch_bytes(url)
            await asyncio.to_thread(target.write_bytes, data)
            logger.info(f"Downloaded {url} to {target}")

        await asyncio.gather(
            *(
                fetch_to(url_info.url, font_dir / f"{variant.id}.{url_info.format.value}")
                for variant in selected
                for url_info in variant.urls
                if formats is None or url_info.format.value in formats
            )
        )

        return LocalDownload(
            id=font_id,
            family=bundle.font.family,
            local_path=f"/api/fonts/{font_id}/local",
            subsets=list(bundle.subsets),
            variants=[variant.id for variant in selected],
            formats=formats or DEFAULT_LOCAL_FORMATS,
            downloaded_at=datetime.now(UTC).isoformat(),
        )

    def list_local_fonts(self) -> list[LocalFont]:
        """Fonts present in the local fonts directory."""
        fonts_dir = self.config.local_fonts_dir
        if not fonts_dir.is_dir():
            return []

        local_fonts = []
        for font_dir in sorted(fonts_dir.iterdir()):
            if not font_dir.is_dir():
                continue

            stems = {
                path.name.split(".")[0]
                for path in font_dir.iterdir()
                if path.suffix.lower() in LOCAL_FONT_SUFFIXES
            }
            font = self.catalog.get(font_dir.name)
            local_fonts.append(
                LocalFont(
                    id=font_dir.name,
                    family=font.family if font else font_dir.name,
                    subsets=list(font.subsets) if font else [],
                    variants=sorted(stems),
                    path=f"/api/fonts/{font_dir.name}/local",
                )
            )
        return local_fonts
