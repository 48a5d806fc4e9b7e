"""Upstream producer contracts and the HTTP byte fetcher."""

from .http import RequestsByteFetcher
from .protocols import ArchiveFetcher, ByteFetcher, VariantURLFetcher

__all__ = ["ArchiveFetcher", "ByteFetcher", "RequestsByteFetcher", "VariantURLFetcher"]
