"""Font catalog and bundle construction."""

from .store import SORT_ORDERS, FontCatalog, transform_api_items

__all__ = ["SORT_ORDERS", "FontCatalog", "transform_api_items"]
