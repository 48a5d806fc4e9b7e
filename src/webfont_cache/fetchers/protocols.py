"""Contracts of the upstream producers the caches delegate to.

Producers own their timeout and retry policy. They return a value, None for
"not resolvable" where allowed, or raise.
"""

from typing import Protocol, runtime_checkable

from ..core.models import FontSubsetArchive, VariantItem


@runtime_checkable
class VariantURLFetcher(Protocol):
    async def fetch_variant_urls(
        self, family: str, catalog_variants: list[str], subsets: list[str]
    ) -> list[VariantItem] | None: ...


@runtime_checkable
class ArchiveFetcher(Protocol):
    async def fetch_subset_archive(
        self, font_id: str, version: str, subsets: list[str], variants: list[VariantItem]
    ) -> FontSubsetArchive: ...


@runtime_checkable
class ByteFetcher(Protocol):
    async def fetch_bytes(self, url: str) -> bytes: ...
