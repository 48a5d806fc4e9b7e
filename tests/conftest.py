"""
Pytest configuration and fixtures for web font cache tests.
"""

import asyncio
import tempfile
import zipfile
from pathlib import Path

import pytest

from webfont_cache.cache.paths import CachePaths
from webfont_cache.catalog.store import FontCatalog
from webfont_cache.core.config import CacheConfig
from webfont_cache.core.models import (
    FontFile,
    FontItem,
    FontSubsetArchive,
    VariantItem,
    VariantURL,
)


class FakeVariantFetcher:
    """Variant URL fetcher returning a fixed result and counting calls."""

    def __init__(self, result=None, error: Exception | None = None, delay: float = 0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls: list[tuple] = []

    async def fetch_variant_urls(self, family, catalog_variants, subsets):
        self.calls.append((family, list(catalog_variants), list(subsets)))
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class FakeArchiveFetcher:
    """Archive fetcher returning a fixed archive and counting calls."""

    def __init__(self, archive=None, error: Exception | None = None, delay: float = 0.0):
        self.archive = archive
        self.error = error
        self.delay = delay
        self.calls: list[tuple] = []

    async def fetch_subset_archive(self, font_id, version, subsets, variants):
        self.calls.append((font_id, version, list(subsets), variants))
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.archive


class FakeByteFetcher:
    """Byte fetcher serving payloads from a dict keyed by URL."""

    def __init__(self, payloads: dict[str, bytes] | None = None, error: Exception | None = None):
        self.payloads = payloads or {}
        self.error = error
        self.calls: list[str] = []

    async def fetch_bytes(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.payloads[url]


@pytest.fixture
def fakes():
    """Namespace of the fake upstream producers."""

    class Fakes:
        VariantFetcher = FakeVariantFetcher
        ArchiveFetcher = FakeArchiveFetcher
        ByteFetcher = FakeByteFetcher

    return Fakes


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def cache_config(temp_dir):
    """Cache configuration rooted in a temporary directory."""
    return CacheConfig(
        cache_root_dir=temp_dir / "cache",
        local_fonts_dir=temp_dir / "fonts",
        max_retries=0,
        backoff_seconds=0.0,
        _env_file=None,
    )


@pytest.fixture
def cache_paths(cache_config):
    return CachePaths(cache_config.cache_root_dir)


@pytest.fixture
def roboto():
    """Catalog entry for Roboto."""
    return FontItem(
        id="roboto",
        family="Roboto",
        subsets=["cyrillic", "greek", "latin", "latin-ext"],
        variants=["regular", "700", "700italic"],
        category="sans-serif",
        version="v32",
        last_modified="2024-02-16",
        popularity=1,
        def_subset="latin",
        def_variant="regular",
    )


@pytest.fixture
def lato():
    """Catalog entry for Lato."""
    return FontItem(
        id="lato",
        family="Lato",
        subsets=["latin", "latin-ext"],
        variants=["regular", "700"],
        category="sans-serif",
        version="v24",
        last_modified="2023-05-02",
        popularity=2,
        def_subset="latin",
        def_variant="regular",
    )


@pytest.fixture
def catalog(roboto, lato):
    return FontCatalog([roboto, lato])


@pytest.fixture
def roboto_bundle(catalog):
    return catalog.build_bundle("roboto", ["latin"])


@pytest.fixture
def regular_variant():
    """Regular Roboto variant with woff2 and ttf URLs."""
    return VariantItem(
        id="regular",
        font_family="'Roboto'",
        font_style="normal",
        font_weight="400",
        urls=[
            VariantURL(format="woff2", url="https://fonts.example/roboto-regular.woff2"),
            VariantURL(format="ttf", url="https://fonts.example/roboto-regular.ttf"),
        ],
    )


@pytest.fixture
def bold_variant():
    """Bold Roboto variant with a woff URL only."""
    return VariantItem(
        id="700",
        font_family="'Roboto'",
        font_style="normal",
        font_weight="700",
        urls=[VariantURL(format="woff", url="https://fonts.example/roboto-700.woff")],
    )


@pytest.fixture
def subset_zip(temp_dir):
    """Subset archive on disk with regular/700 in woff2 and ttf."""
    zip_path = temp_dir / "roboto-v32-latin.zip"
    files = []
    with zipfile.ZipFile(zip_path, "w") as archive:
        for variant in ("regular", "700"):
            for fmt in ("woff2", "ttf"):
                name = f"roboto-v32-latin-{variant}.{fmt}"
                archive.writestr(name, f"{variant}-{fmt}".encode())
                files.append(FontFile(variant=variant, format=fmt, path=name))
    return FontSubsetArchive(zip_path=str(zip_path), files=files)


def pytest_collection_modifyitems(config, items):
    """Mark tests as unit or integration by location."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
