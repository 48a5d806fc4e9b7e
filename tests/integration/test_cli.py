"""
CLI Integration Tests
=====================

Tests the maintenance CLI against a temporary cache directory.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from main import cli
from webfont_cache.cache.paths import CachePaths


class TestCLIIntegration:
    """CLI integration tests."""

    @pytest.fixture
    def runner(self):
        """Click test runner."""
        return CliRunner()

    @pytest.fixture
    def catalog_file(self, temp_dir, roboto, lato):
        path = temp_dir / "catalog.json"
        path.write_text(
            json.dumps([font.model_dump(by_alias=True) for font in (roboto, lato)])
        )
        return path

    @pytest.fixture
    def populated_cache(self, temp_dir):
        paths = CachePaths(temp_dir / "cache")
        paths.variants_file("roboto@v31__latin").write_text("[]")
        paths.variants_file("lato@v24__latin").write_text("[]")
        paths.base64_file("lato@v24__latin", "regular", "woff2").write_text("data:")
        paths.variants_file("gone@v1__latin").write_text("[]")
        return paths

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("sweep", "stats", "clear", "fonts"):
            assert command in result.output

    def test_sweep(self, runner, catalog_file, populated_cache):
        result = runner.invoke(
            cli,
            ["--cache-dir", str(populated_cache.cache_root), "sweep", "--catalog", str(catalog_file)],
        )

        assert result.exit_code == 0, result.output
        assert "deleted gone" in result.output
        assert "deleted roboto" in result.output
        assert sorted(p.name for p in populated_cache.variants_root.iterdir()) == ["lato"]

    def test_sweep_dry_run(self, runner, catalog_file, populated_cache):
        result = runner.invoke(
            cli,
            [
                "--cache-dir",
                str(populated_cache.cache_root),
                "sweep",
                "--catalog",
                str(catalog_file),
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "would delete gone" in result.output
        assert len(list(populated_cache.variants_root.iterdir())) == 3

    def test_sweep_without_catalog_fails(self, runner, populated_cache, monkeypatch):
        monkeypatch.delenv("WEBFONTS_CATALOG_PATH", raising=False)

        result = runner.invoke(cli, ["--cache-dir", str(populated_cache.cache_root), "sweep"])

        assert result.exit_code == 1

    def test_stats(self, runner, populated_cache):
        result = runner.invoke(cli, ["--cache-dir", str(populated_cache.cache_root), "stats"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "fonts": 3,
            "versions": 3,
            "variant_files": 3,
            "base64_files": 1,
        }

    def test_clear(self, runner, populated_cache):
        result = runner.invoke(
            cli, ["--cache-dir", str(populated_cache.cache_root), "clear", "--yes"]
        )

        assert result.exit_code == 0, result.output
        assert not populated_cache.variants_root.exists()

    def test_clear_aborts_without_confirmation(self, runner, populated_cache):
        result = runner.invoke(
            cli, ["--cache-dir", str(populated_cache.cache_root), "clear"], input="n\n"
        )

        assert result.exit_code == 1
        assert populated_cache.variants_root.exists()

    def test_fonts(self, runner, catalog_file):
        result = runner.invoke(cli, ["fonts", "--catalog", str(catalog_file), "--sort", "alphabetical"])

        assert result.exit_code == 0, result.output
        assert [font["id"] for font in json.loads(result.output)] == ["lato", "roboto"]

    def test_config_file(self, runner, temp_dir, populated_cache):
        config_path = temp_dir / "cache.yaml"
        with config_path.open("w") as f:
            yaml.dump({"cache_root_dir": str(populated_cache.cache_root)}, f)

        result = runner.invoke(cli, ["--config", str(config_path), "stats"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["fonts"] == 3

    def test_fonts_with_invalid_catalog(self, runner, temp_dir):
        catalog_path = temp_dir / "bad.json"
        catalog_path.write_text(json.dumps({"items": [{"family": "Foo"}]}))

        result = runner.invoke(cli, ["fonts", "--catalog", str(catalog_path)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, KeyError)
