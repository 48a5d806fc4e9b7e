"""Pydantic models for type-safe data structures."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .exceptions import InvalidStoreIDError


class FontFormat(str, Enum):
    """Binary formats a variant can be served in."""

    EOT = "eot"
    WOFF = "woff"
    WOFF2 = "woff2"
    TTF = "ttf"
    SVG = "svg"


# Preferred order when a single inline payload has to be picked
FORMAT_PRIORITY: tuple[FontFormat, ...] = (
    FontFormat.WOFF2,
    FontFormat.WOFF,
    FontFormat.TTF,
    FontFormat.EOT,
    FontFormat.SVG,
)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FontItem(CamelModel):
    """Catalog entry for a single font family."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    family: str = Field(..., min_length=1)
    subsets: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)
    category: str = ""
    version: str = Field(..., min_length=1)
    last_modified: str = ""
    popularity: int = 0
    def_subset: str = "latin"
    def_variant: str = "regular"


class VariantURL(CamelModel):
    """Download location of a variant in one format."""

    format: FontFormat
    url: str = Field(..., min_length=1)


class VariantItem(CamelModel):
    """One weight/style combination of a font family."""

    id: str = ""
    font_family: str = Field(..., min_length=1)
    font_style: str = Field(..., min_length=1)
    font_weight: str = Field(..., min_length=1)
    urls: list[VariantURL]

    def url_for(self, font_format: FontFormat | str) -> VariantURL | None:
        """Return the URL entry for ``font_format`` if the variant has one."""
        for url_info in self.urls:
            if url_info.format == font_format:
                return url_info
        return None


VariantItemList = TypeAdapter(list[VariantItem])


class FontFile(CamelModel):
    """A single file inside a subset archive."""

    variant: str
    format: FontFormat
    path: str = Field(..., min_length=1, description="Path within the archive")


class FontSubsetArchive(CamelModel):
    """Descriptor of a downloaded per-subset zip archive."""

    zip_path: str
    files: list[FontFile] = Field(default_factory=list)


def make_store_id(font_id: str, version: str, subsets) -> str:
    """Build the ``{fontID}@{version}__{subsetsJoined}`` key."""
    return f"{font_id}@{version}__{'_'.join(sorted(subsets))}"


@dataclass(frozen=True)
class StoreKey:
    """Components of a parsed store id."""

    font_id: str
    version: str
    subsets_joined: str

    @classmethod
    def parse(cls, store_id: str) -> "StoreKey":
        font_id, sep, rest = store_id.partition("@")
        version, sep2, subsets_joined = rest.partition("__")
        if not (font_id and sep and version and sep2 and subsets_joined):
            raise InvalidStoreIDError(store_id)
        if "/" in store_id or "\\" in store_id:
            raise InvalidStoreIDError(store_id)
        return cls(font_id=font_id, version=version, subsets_joined=subsets_joined)


@dataclass(frozen=True)
class FontBundle:
    """A resolved (font, subset selection) pair with its cache key."""

    font: FontItem
    subsets: tuple[str, ...]
    store_id: str = field(init=False)

    def __post_init__(self):
        subsets = tuple(sorted(set(self.subsets)))
        object.__setattr__(self, "subsets", subsets)
        object.__setattr__(
            self, "store_id", make_store_id(self.font.id, self.font.version, subsets)
        )


# Response views
class APIListFont(CamelModel):
    """Font list entry."""

    id: str
    family: str
    variants: list[str]
    subsets: list[str]
    category: str
    version: str
    last_modified: str
    popularity: int
    def_subset: str
    def_variant: str

    @classmethod
    def from_font(cls, font: FontItem) -> "APIListFont":
        return cls(**font.model_dump())


class APIVariant(CamelModel):
    """Variant entry of a font description, one key per available format."""

    id: str
    font_family: str | None = None
    font_style: str | None = None
    font_weight: str | None = None
    eot: str | None = None
    woff: str | None = None
    woff2: str | None = None
    svg: str | None = None
    ttf: str | None = None

    @classmethod
    def from_variant(cls, variant: VariantItem) -> "APIVariant":
        urls = {url_info.format.value: url_info.url for url_info in variant.urls}
        return cls(
            id=variant.id,
            font_family=variant.font_family,
            font_style=variant.font_style,
            font_weight=variant.font_weight,
            **urls,
        )


class APIFont(CamelModel):
    """Full description of a font for a given subset selection."""

    id: str
    family: str
    subsets: list[str]
    category: str
    version: str
    last_modified: str
    popularity: int
    def_subset: str
    def_variant: str
    subset_map: dict[str, bool]
    store_id: str = Field(
        ..., alias="storeID", description="Legacy id: selected subsets joined by '_'"
    )
    variants: list[APIVariant]


class Base64Font(BaseModel):
    """Inline payload of one variant."""

    id: str
    family: str
    subset: str
    style: str
    weight: str
    base64: str


class LocalDownload(CamelModel):
    """Result of a local download."""

    id: str
    family: str
    local_path: str
    subsets: list[str]
    variants: list[str]
    formats: list[str]
    downloaded_at: str


class LocalFont(BaseModel):
    """A font found in the local fonts directory."""

    id: str
    family: str
    subsets: list[str]
    variants: list[str]
    path: str
