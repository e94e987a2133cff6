"""Image match assertion — compares a captured screenshot against its baseline."""

from __future__ import annotations

import logging
from typing import Any

from playwright.async_api import Page

from src.matcher.comparator import compare_images
from src.matcher.diagnostics import build_diagnostic, build_record
from src.matcher.errors import FailureKind, ImageMatchError
from src.matcher.link_checker import scan_dangerous_links
from src.matcher.path_resolver import ensure_image_extension, resolve_paths
from src.models.match import (
    ComparisonRequest,
    ComparisonResult,
    MatchContext,
    ResolvedPaths,
)

logger = logging.getLogger(__name__)


class ImageMatcher:
    """Asserts that screenshots of a page match their expected baselines.

    The processed screenshot is always written to disk first, so a failing
    run leaves the new image behind for inspection. Every successful match is
    followed by a dangerous link scan of the page.
    """

    def __init__(self, context: MatchContext, page: Page, page_logs: list[str] | None = None):
        self.context = context
        self.page = page
        self.page_logs = page_logs if page_logs is not None else []

    async def match_image(
        self,
        image: bytes,
        params: str | dict[str, Any] | ComparisonRequest,
    ) -> ComparisonResult:
        """Write ``image`` and compare it, raising ImageMatchError on failure."""
        if not isinstance(image, (bytes, bytearray)):
            raise TypeError(f"expected screenshot bytes, got {type(image).__name__}")

        request = ComparisonRequest.coerce(params)
        image_name, compare_against = request.resolve_names(self.context.suite_title)
        image_name = ensure_image_extension(image_name)
        paths = resolve_paths(image_name, compare_against, self.context)

        paths.processed_path.parent.mkdir(parents=True, exist_ok=True)
        paths.processed_path.write_bytes(image)
        logger.debug("Wrote %d bytes to %s", len(image), paths.processed_path)

        try:
            if not paths.expected_path.is_file():
                self.context.record_missing(image_name)
                raise ImageMatchError(
                    FailureKind.MISSING_BASELINE,
                    f"expected file at '{paths.expected_path}' does not exist",
                )

            result = await compare_images(
                paths.expected_path,
                paths.processed_path,
                command=self.context.config.comparison_command,
                threshold=request.comparison_threshold,
            )
            if not result.matched:
                raise ImageMatchError(
                    FailureKind.IMAGES_DIFFER,
                    f"expected screenshot to match {paths.expected_path}",
                )

            links = await scan_dangerous_links(self.page)
            if links != "[]":
                raise ImageMatchError(
                    FailureKind.DANGEROUS_LINK_FOUND,
                    f"found dangerous links: {links}",
                )
        except ImageMatchError as e:
            raise self._fail(e.kind, e.message, paths) from None

        logger.info("Screenshot %s matches %s", image_name, paths.expected_path.name)
        return result

    def _fail(self, kind: FailureKind, message: str, paths: ResolvedPaths) -> ImageMatchError:
        record = build_record(message, self.page.url, paths, self.page_logs)
        logger.warning("Screenshot assertion failed (%s): %s", kind.value, message)
        return ImageMatchError(kind, message, build_diagnostic(record))
