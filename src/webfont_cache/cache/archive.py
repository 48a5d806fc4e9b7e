"""
Subset Archive Cache
====================

Memory-only cache of per-subset zip archive descriptors. The zip itself lives
on disk at ``zip_path``; filtered downloads are rebuilt from it on demand.
"""

import asyncio
import io
import logging
import zipfile
from pathlib import Path

from ..core.exceptions import EmptyArchiveError, NoMatchingFilesError
from ..core.models import FontBundle, FontFile, FontSubsetArchive, VariantItem
from ..fetchers.protocols import ArchiveFetcher
from .dedup import KeyedExecutor
from .memory import MemoryStore

logger = logging.getLogger(__name__)

MEMORY_NAMESPACE = "archives"


class ArchiveCache:
    """Resolve and cache subset archive descriptors per bundle."""

    def __init__(
        self,
        fetcher: ArchiveFetcher,
        memory: MemoryStore | None = None,
        executor: KeyedExecutor | None = None,
    ):
        self.fetcher = fetcher
        self.memory = memory if memory is not None else MemoryStore()
        self.executor = executor if executor is not None else KeyedExecutor()

    async def resolve(
        self, bundle: FontBundle, variants: list[VariantItem]
    ) -> FontSubsetArchive:
        return await self.executor.run(
            f"resolveArchive__{bundle.store_id}", lambda: self._resolve(bundle, variants)
        )

    async def _resolve(
        self, bundle: FontBundle, variants: list[VariantItem]
    ) -> FontSubsetArchive:
        stored = self.memory.get(MEMORY_NAMESPACE, bundle.store_id)
        if stored is not None:
            logger.debug(f"Memory hit for archive of {bundle.store_id}")
            return stored

        font = bundle.font
        logger.info(f"Fetching subset archive for {bundle.store_id}")
        archive = await self.fetcher.fetch_subset_archive(
            font.id, font.version, list(bundle.subsets), variants
        )

        if not archive.files:
            raise EmptyArchiveError(bundle.store_id)

        self.memory.set(MEMORY_NAMESPACE, bundle.store_id, archive)
        return archive


def select_files(
    archive: FontSubsetArchive,
    variants: list[str] | None = None,
    formats: list[str] | None = None,
) -> list[FontFile]:
    """Files matching the requested variants and formats; None matches everything."""
    return [
        font_file
        for font_file in archive.files
        if (variants is None or font_file.variant in variants)
        and (formats is None or font_file.format.value in formats)
    ]


def _repack(zip_path: Path, keep: set[str]) -> bytes:
    buffer = io.BytesIO()
    with (
        zipfile.ZipFile(zip_path) as source,
        zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as target,
    ):
        for info in source.infolist():
            if info.filename in keep:
                target.writestr(info.filename, source.read(info.filename))
    return buffer.getvalue()


async def build_filtered_archive(
    store_id: str,
    archive: FontSubsetArchive,
    variants: list[str] | None = None,
    formats: list[str] | None = None,
) -> tuple[str, bytes]:
    """Build a new zip from the cached archive containing only the selected files.

    Returns the download filename and the zip bytes.
    """
    selected = select_files(archive, variants, formats)
    if not selected:
        raise NoMatchingFilesError(store_id)

    zip_path = Path(archive.zip_path)
    data = await asyncio.to_thread(_repack, zip_path, {font_file.path for font_file in selected})
    logger.info(f"Built filtered archive for {store_id} with {len(selected)} file(s)")
    return zip_path.name, data
