"""Tests for the cache path scheme."""

import pytest

from webfont_cache.cache.paths import CachePaths
from webfont_cache.core.exceptions import InvalidStoreIDError
from webfont_cache.core.models import FontBundle, StoreKey


class TestStoreKey:
    """Test store id parsing."""

    def test_parse(self):
        key = StoreKey.parse("roboto@v32__latin_latin-ext")

        assert key.font_id == "roboto"
        assert key.version == "v32"
        assert key.subsets_joined == "latin_latin-ext"

    @pytest.mark.parametrize(
        "store_id",
        ["roboto", "roboto@v32", "@v32__latin", "roboto@__latin", "roboto@v32__", "../x@v1__latin"],
    )
    def test_parse_rejects_malformed(self, store_id):
        with pytest.raises(InvalidStoreIDError):
            StoreKey.parse(store_id)


class TestCachePaths:
    """Test CachePaths layout."""

    def test_variants_file_layout(self, temp_dir):
        paths = CachePaths(temp_dir)

        path = paths.variants_file("roboto@v32__latin")

        assert path == temp_dir / "variants" / "roboto" / "v32" / "roboto@v32__latin.json"
        assert path.parent.is_dir()
        assert not path.exists()

    def test_base64_file_layout(self, temp_dir):
        paths = CachePaths(temp_dir)

        path = paths.base64_file("roboto@v32__latin_latin-ext", "700italic", "woff2")

        assert path == (
            temp_dir
            / "variants"
            / "roboto"
            / "v32"
            / "roboto@v32__latin_latin-ext__700italic_woff2.base64"
        )
        assert path.parent.is_dir()

    def test_directory_creation_is_idempotent(self, temp_dir):
        paths = CachePaths(temp_dir)

        first = paths.variants_file("roboto@v32__latin")
        second = paths.variants_file("roboto@v32__latin")

        assert first == second

    def test_version_partition(self, temp_dir, roboto):
        """Same font, different versions never share a path."""
        paths = CachePaths(temp_dir)
        old = FontBundle(font=roboto.model_copy(update={"version": "v31"}), subsets=("latin",))
        new = FontBundle(font=roboto, subsets=("latin",))

        assert old.store_id != new.store_id
        assert paths.variants_file(old.store_id) != paths.variants_file(new.store_id)
        assert paths.variants_file(old.store_id).parent != paths.variants_file(new.store_id).parent
        assert paths.base64_file(old.store_id, "regular", "woff2") != paths.base64_file(
            new.store_id, "regular", "woff2"
        )

    def test_unknown_format_rejected(self, temp_dir):
        paths = CachePaths(temp_dir)

        with pytest.raises(ValueError):
            paths.base64_file("roboto@v32__latin", "regular", "otf")
