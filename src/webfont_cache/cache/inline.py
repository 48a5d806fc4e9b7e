"""Disk-persisted cache of inline ``data:`` URIs for single variant files."""

import asyncio
import base64
import logging
import os
import tempfile
from pathlib import Path

from ..core.models import FontBundle, VariantItem, VariantURL
from ..fetchers.protocols import ByteFetcher
from .paths import CachePaths

logger = logging.getLogger(__name__)


def data_uri_prefix(font_format: str) -> str:
    return f"data:font/{font_format};base64,"


def to_data_uri(font_format: str, data: bytes) -> str:
    return data_uri_prefix(font_format) + base64.b64encode(data).decode("ascii")


def _read_payload(cache_file: Path, font_format: str) -> str | None:
    """Return the stored data URI, or None when missing or not a complete payload."""
    if not cache_file.exists():
        return None

    payload = cache_file.read_text(encoding="utf-8")
    prefix = data_uri_prefix(font_format)
    if not payload.startswith(prefix) or len(payload) == len(prefix):
        logger.warning(f"Ignoring invalid base64 cache file {cache_file}")
        return None
    return payload


def _write_payload(cache_file: Path, data_uri: str) -> None:
    # Readers only ever see a missing file or a complete one
    fd, tmp_name = tempfile.mkstemp(dir=cache_file.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(data_uri)
        os.replace(tmp_name, cache_file)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class Base64Cache:
    """Resolve inline payloads, fetching and persisting them on a miss.

    There is no dedup layer: concurrent misses each perform one fetch and
    write the same content.
    """

    def __init__(self, paths: CachePaths, fetcher: ByteFetcher):
        self.paths = paths
        self.fetcher = fetcher

    async def resolve(self, bundle: FontBundle, variant: VariantItem, url_info: VariantURL) -> str:
        font_format = url_info.format.value
        cache_file = await asyncio.to_thread(
            self.paths.base64_file, bundle.store_id, variant.id, url_info.format
        )

        try:
            cached = await asyncio.to_thread(_read_payload, cache_file, font_format)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading base64 payload at {cache_file}: {e}")
            cached = None
        if cached is not None:
            logger.debug(f"Disk hit for base64 payload {cache_file.name}")
            return cached

        logger.info(f"Fetching {url_info.url} for inline embedding")
        data = await self.fetcher.fetch_bytes(url_info.url)
        data_uri = to_data_uri(font_format, data)

        try:
            await asyncio.to_thread(_write_payload, cache_file, data_uri)
        except OSError as e:
            logger.error(f"Error storing base64 payload at {cache_file}: {e}")
        return data_uri
