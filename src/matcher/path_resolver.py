"""Path resolution for expected (baseline) and processed screenshots."""

from __future__ import annotations

import logging
from pathlib import Path

from src.models.match import MatchContext, ResolvedPaths

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".txt")


def ensure_image_extension(filename: str) -> str:
    """Assume a file is a PNG image unless it already names .png or .txt."""
    if not filename.endswith(IMAGE_EXTENSIONS):
        return filename + ".png"
    return filename


def expected_screenshots_dir(context: MatchContext) -> Path:
    """First configured expected directory that exists, else the first candidate."""
    base = Path(context.base_directory)
    candidates = [base / d for d in context.config.expected_screenshots_dirs]
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    logger.debug("No expected screenshots directory exists, using %s", candidates[0])
    return candidates[0]


def processed_screenshots_dir(context: MatchContext) -> Path:
    """Directory new screenshots are written to. Created if missing."""
    config = context.config
    if config.store_in_ui_tests_repo:
        root = Path(config.ui_tests_dir)
    else:
        root = Path(context.base_directory)
    path = root / config.processed_screenshots_dir
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_paths(image_name: str, compare_against: str, context: MatchContext) -> ResolvedPaths:
    expected = expected_screenshots_dir(context) / ensure_image_extension(compare_against)
    processed = processed_screenshots_dir(context) / ensure_image_extension(image_name)
    logger.debug("Resolved %s: expected=%s processed=%s", image_name, expected, processed)
    return ResolvedPaths(expected_path=expected, processed_path=processed)
