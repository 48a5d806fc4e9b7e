"""
Font Catalog
============

Point-in-time view over the list of catalog fonts, plus the bundle
constructor that turns ``(fontID, requested subsets)`` into a ``FontBundle``.
"""

import json
import logging
from pathlib import Path

from slugify import slugify

from ..core.exceptions import ConfigurationError
from ..core.models import FontBundle, FontItem

logger = logging.getLogger(__name__)

SORT_ORDERS = ("popularity", "alphabetical", "newest")


def transform_api_items(items: list[dict]) -> list[FontItem]:
    """Convert Google Fonts API items (ordered by popularity) into catalog fonts."""
    fonts = []
    for index, item in enumerate(items):
        subsets = list(item.get("subsets", []))
        variants = list(item.get("variants", []))
        fonts.append(
            FontItem(
                id=slugify(item["family"]),
                family=item["family"],
                variants=variants,
                subsets=subsets,
                category=item.get("category", ""),
                version=item["version"],
                last_modified=item.get("lastModified", ""),
                popularity=index + 1,
                def_subset="latin" if "latin" in subsets else (subsets[0] if subsets else ""),
                def_variant="regular" if "regular" in variants else (variants[0] if variants else ""),
            )
        )
    return fonts


class FontCatalog:
    """Holds the current font list, already sorted by popularity."""

    def __init__(self, font_items: list[FontItem] | None = None):
        self._items: list[FontItem] = []
        self._by_id: dict[str, FontItem] = {}
        self.replace(font_items or [])

    @classmethod
    def from_json(cls, path: str | Path) -> "FontCatalog":
        """Load a catalog from a Google Fonts API response or a list of font items."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to read catalog {path}: {e}") from e

        if not (isinstance(data, dict) and "items" in data) and not isinstance(data, list):
            raise ConfigurationError(f"Unrecognized catalog format in {path}")

        try:
            if isinstance(data, list):
                fonts = [FontItem.model_validate(item) for item in data]
            else:
                fonts = transform_api_items(data["items"])
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            # pydantic ValidationError is a ValueError
            raise ConfigurationError(f"Invalid font entry in catalog {path}: {e!r}") from e

        logger.info(f"Loaded {len(fonts)} fonts from {path}")
        return cls(fonts)

    def replace(self, font_items: list[FontItem]) -> None:
        """Swap in a new font list wholesale."""
        self._items = list(font_items)
        self._by_id = {font.id: font for font in self._items}

    def list_font_items(self) -> list[FontItem]:
        return list(self._items)

    def sorted_items(self, sort: str = "popularity") -> list[FontItem]:
        sort = sort.lower()
        if sort == "alphabetical":
            return sorted(self._items, key=lambda font: font.family)
        if sort == "newest":
            return sorted(self._items, key=lambda font: font.last_modified, reverse=True)
        # popularity is the stored order; unknown orders fall back to it
        return list(self._items)

    def get(self, font_id: str) -> FontItem | None:
        return self._by_id.get(font_id)

    def versions(self) -> dict[str, str]:
        return {font.id: font.version for font in self._items}

    def build_bundle(self, font_id: str, requested_subsets: list[str] | None) -> FontBundle | None:
        """Resolve a request into a bundle, or None when no bundle can be built.

        Requested subsets are intersected with the font's subsets; an empty or
        missing selection falls back to the font's default subset.
        """
        font = self.get(font_id)
        if font is None:
            return None

        subsets = [subset for subset in (requested_subsets or []) if subset in font.subsets]
        if not subsets:
            if not font.def_subset:
                logger.warning(f"Font {font_id} has no subset to serve")
                return None
            subsets = [font.def_subset]
        return FontBundle(font=font, subsets=tuple(subsets))

    @staticmethod
    def subset_map(bundle: FontBundle) -> dict[str, bool]:
        return {subset: subset in bundle.subsets for subset in bundle.font.subsets}

    def __len__(self) -> int:
        return len(self._items)
