"""
Decides which source files the style, complexity and duplication tools scan.
"""

import logging

from . import config
from .services.files import ProjectFiles

logger = logging.getLogger(__name__)


def _is_scannable(name: str) -> bool:
    if name.startswith("."):
        return False
    return name not in config.SCAN_EXCLUDES and not name.endswith(config.SCAN_EXCLUDE_SUFFIXES)


def scan_targets(files: ProjectFiles) -> list[str]:
    """
    Returns the paths to hand to the code quality tools.

    Conventional source directories win, in priority order. A flat layout
    falls back to every visible source file in the project root minus the
    scoring script, fixtures, manifests and spec/test files. If nothing is
    left the whole directory is scanned so the tools still run.

    Args:
        files: The scored project.

    Returns:
        A non-empty list of project-relative paths.
    """
    existing = [f"{path}/" for path in config.SCAN_PATHS if files.is_dir(path)]
    if existing:
        return existing

    flat = [name for name in files.glob(config.SCAN_GLOB) if files.is_file(name) and _is_scannable(name)]
    if flat:
        return flat

    logger.info("no source files found, scanning %s", config.SCAN_FALLBACK_TARGET)
    return [config.SCAN_FALLBACK_TARGET]
