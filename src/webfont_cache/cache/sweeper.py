"""
Cache Sweeper
=============

Version-based invalidation of the disk cache. A sweep is three steps:

1. ``scan_versions`` enumerates ``{fontID: {versions}}`` from the cache tree (read-only).
2. ``plan_sweep`` decides what is stale against the catalog (pure).
3. ``apply_sweep`` deletes the planned directories.

Base64 payloads live in the same ``{fontID}/{version}`` directories as the
variant lists, so they are reclaimed by the same pass.
"""

import logging
import shutil
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..core.models import FontItem
from .paths import BASE64_SUFFIX, VARIANTS_SUFFIX, CachePaths

logger = logging.getLogger(__name__)


@dataclass
class SweepPlan:
    """Directories to delete, relative to the variants root."""

    remove_fonts: list[str] = field(default_factory=list)
    remove_versions: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.remove_fonts and not self.remove_versions

    def targets(self) -> list[Path]:
        paths = [Path(font_id) for font_id in self.remove_fonts]
        for font_id, versions in self.remove_versions.items():
            paths.extend(Path(font_id) / version for version in versions)
        return paths


@dataclass
class SweepResult:
    """Outcome of applying a sweep plan."""

    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass
class CacheStats:
    """Disk cache statistics."""

    fonts: int = 0
    versions: int = 0
    variant_files: int = 0
    base64_files: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "fonts": self.fonts,
            "versions": self.versions,
            "variant_files": self.variant_files,
            "base64_files": self.base64_files,
        }


def scan_versions(variants_root: Path) -> dict[str, set[str]]:
    """Map every cached font id to the version directories found under it."""
    index: dict[str, set[str]] = {}
    if not variants_root.is_dir():
        return index

    for font_dir in variants_root.iterdir():
        if not font_dir.is_dir():
            continue
        index[font_dir.name] = {
            version_dir.name for version_dir in font_dir.iterdir() if version_dir.is_dir()
        }
    return index


def plan_sweep(index: Mapping[str, Iterable[str]], catalog_versions: Mapping[str, str]) -> SweepPlan:
    """Decide which cached fonts and versions are stale.

    A font missing from the catalog is removed entirely, as is a font holding
    no directory for its current version. Otherwise only the outdated version
    directories go.
    """
    plan = SweepPlan()
    for font_id in sorted(index):
        versions = set(index[font_id])
        current = catalog_versions.get(font_id)

        if current is None or current not in versions:
            plan.remove_fonts.append(font_id)
            continue

        stale = sorted(versions - {current})
        if stale:
            plan.remove_versions[font_id] = stale
    return plan


def apply_sweep(variants_root: Path, plan: SweepPlan) -> SweepResult:
    """Delete the directories named by ``plan``."""
    result = SweepResult()
    for relative in plan.targets():
        target = variants_root / relative
        try:
            shutil.rmtree(target)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.error(f"Failed to delete stale cache directory {target}: {e}")
            result.failed.append(relative.as_posix())
        else:
            logger.info(f"Deleted stale cache directory {target}")
            result.deleted.append(relative.as_posix())
    return result


class CacheSweeper:
    """Invalidate disk cache entries against the current catalog."""

    def __init__(self, paths: CachePaths):
        self.paths = paths

    def plan(self, font_items: Iterable[FontItem]) -> SweepPlan:
        catalog_versions = {font.id: font.version for font in font_items}
        return plan_sweep(scan_versions(self.paths.variants_root), catalog_versions)

    def sweep(self, font_items: Iterable[FontItem]) -> SweepResult:
        plan = self.plan(font_items)
        if plan.is_empty:
            logger.debug("Cache sweep found nothing stale")
            return SweepResult()
        result = apply_sweep(self.paths.variants_root, plan)
        logger.info(
            f"Cache sweep deleted {len(result.deleted)} director(ies), {len(result.failed)} failed"
        )
        return result


def cache_stats(paths: CachePaths) -> CacheStats:
    """Count cached fonts, versions and files."""
    stats = CacheStats()
    index = scan_versions(paths.variants_root)
    stats.fonts = len(index)
    stats.versions = sum(len(versions) for versions in index.values())

    if paths.variants_root.is_dir():
        for cache_file in paths.variants_root.rglob("*"):
            if not cache_file.is_file():
                continue
            if cache_file.name.endswith(VARIANTS_SUFFIX):
                stats.variant_files += 1
            elif cache_file.name.endswith(BASE64_SUFFIX):
                stats.base64_files += 1
    return stats


def clear_cache(paths: CachePaths) -> bool:
    """Remove the whole variants tree, returning whether it succeeded."""
    try:
        shutil.rmtree(paths.variants_root)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.error(f"Error clearing variant items cache: {e}")
        return False
    logger.info(f"Cleared variant cache at {paths.variants_root}")
    return True
