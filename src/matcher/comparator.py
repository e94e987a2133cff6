"""Comparator — runs ImageMagick's compare and interprets the pixel error."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from src.matcher.errors import FailureKind, ImageMatchError
from src.models.match import ComparisonResult

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND_STATUS = 127

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def build_compare_args(expected: Path, processed: Path) -> list[str]:
    # Absolute-error metric, diff image discarded
    return ["-metric", "ae", str(expected), str(processed), "null:"]


def parse_pixel_error(output: str) -> int | None:
    """Parse the leading integer of the tool output, e.g. '152 (0.0023)' -> 152."""
    m = _LEADING_INT_RE.match(output)
    if not m:
        return None
    return int(m.group(1))


def _tool_not_found(command: str) -> ImageMatchError:
    return ImageMatchError(
        FailureKind.TOOL_NOT_FOUND,
        f"the '{command}' command was not found, ('compare' is provided by imagemagick)",
    )


async def compare_images(
    expected: Path,
    processed: Path,
    command: str = "compare",
    threshold: float | None = None,
) -> ComparisonResult:
    """Compare two image files, requiring an exact zero-pixel-error match.

    ``threshold`` is accepted for API compatibility but not applied: any
    non-zero pixel error is a mismatch.
    """
    args = build_compare_args(expected, processed)
    logger.debug("Running %s %s", command, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        raise _tool_not_found(command) from None

    stdout, stderr = await proc.communicate()

    if proc.returncode == COMMAND_NOT_FOUND_STATUS:
        raise _tool_not_found(command)

    if proc.returncode != 0:
        logger.debug("%s exited with status %d, treating as mismatch", command, proc.returncode)
        return ComparisonResult(pixel_error=None, matched=False)

    all_output = stdout.decode(errors="replace") + stderr.decode(errors="replace")
    pixel_error = parse_pixel_error(all_output)
    if pixel_error is None:
        raise ImageMatchError(
            FailureKind.TOOL_OUTPUT_UNPARSEABLE,
            f"the '{command}' command output could not be parsed, should be"
            f" an integer, got: {all_output}",
        )

    matched = pixel_error == 0
    if not matched and threshold:
        logger.debug(
            "Comparison threshold %s ignored, exact match required (pixel error %d)",
            threshold, pixel_error,
        )
    return ComparisonResult(pixel_error=pixel_error, matched=matched)
