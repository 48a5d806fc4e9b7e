#!/usr/bin/env python3
"""
Main CLI for the Web Font Cache
===============================

Maintenance commands for the disk cache: sweeping stale entries, statistics,
clearing, and inspecting a font catalog.
"""

import json
import logging
import sys
from pathlib import Path

import click

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from webfont_cache.cache import CachePaths, CacheSweeper, cache_stats, clear_cache
    from webfont_cache.catalog import SORT_ORDERS, FontCatalog
    from webfont_cache.core.config import CacheConfig
    from webfont_cache.core.exceptions import ConfigurationError, WebfontCacheError
    from webfont_cache.core.models import APIListFont
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)


def _load_catalog(config: CacheConfig, catalog: Path | None) -> FontCatalog:
    path = catalog or config.catalog_path
    if path is None:
        raise ConfigurationError("No catalog given: use --catalog or set WEBFONTS_CATALOG_PATH")
    return FontCatalog.from_json(path)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to cache configuration YAML file",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Override the cache root directory",
)
@click.pass_context
def cli(ctx, verbose, config_path, cache_dir):
    """Web Font Cache CLI."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = CacheConfig.from_env_and_yaml(yaml_path=config_path)
    except WebfontCacheError as e:
        logger.exception(f"Failed to load configuration: {e}")
        sys.exit(1)

    if cache_dir is not None:
        config.cache_root_dir = cache_dir.expanduser()
    ctx.obj = config


@cli.command()
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Catalog JSON file (defaults to WEBFONTS_CATALOG_PATH)",
)
@click.option("--dry-run", is_flag=True, help="Only report what would be deleted")
@click.pass_obj
def sweep(config, catalog, dry_run):
    """Delete cached fonts whose version no longer matches the catalog."""
    try:
        font_catalog = _load_catalog(config, catalog)
        sweeper = CacheSweeper(CachePaths(config.cache_root_dir))

        if dry_run:
            plan = sweeper.plan(font_catalog.list_font_items())
            for target in plan.targets():
                click.echo(f"would delete {target.as_posix()}")
            return

        result = sweeper.sweep(font_catalog.list_font_items())
        for deleted in result.deleted:
            click.echo(f"deleted {deleted}")
        if result.failed:
            click.echo(f"{len(result.failed)} director(ies) could not be deleted", err=True)
            sys.exit(1)
    except WebfontCacheError as e:
        logger.exception(f"Sweep failed: {e}")
        sys.exit(1)


@cli.command()
@click.pass_obj
def stats(config):
    """Print disk cache statistics as JSON."""
    click.echo(json.dumps(cache_stats(CachePaths(config.cache_root_dir)).to_dict(), indent=2))


@cli.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def clear(config, yes):
    """Remove every cached variant list and base64 payload."""
    paths = CachePaths(config.cache_root_dir)
    if not yes:
        click.confirm(f"Delete {paths.variants_root}?", abort=True)
    if not clear_cache(paths):
        sys.exit(1)
    click.echo("Cache cleared.")


@cli.command()
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Catalog JSON file (defaults to WEBFONTS_CATALOG_PATH)",
)
@click.option("--sort", type=click.Choice(SORT_ORDERS), default="popularity", show_default=True)
@click.option("--limit", type=int, default=None, help="Maximum number of fonts to print")
@click.pass_obj
def fonts(config, catalog, sort, limit):
    """List catalog fonts as JSON."""
    try:
        font_catalog = _load_catalog(config, catalog)
    except WebfontCacheError as e:
        logger.exception(f"Failed to load catalog: {e}")
        sys.exit(1)

    items = [
        APIListFont.from_font(font).model_dump(by_alias=True)
        for font in font_catalog.sorted_items(sort)[:limit]
    ]
    click.echo(json.dumps(items, indent=2))


if __name__ == "__main__":
    cli()
