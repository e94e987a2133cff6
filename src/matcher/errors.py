"""Failure types raised by screenshot match assertions."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    MISSING_BASELINE = "missing_baseline"
    TOOL_NOT_FOUND = "tool_not_found"
    TOOL_OUTPUT_UNPARSEABLE = "tool_output_unparseable"
    IMAGES_DIFFER = "images_differ"
    DANGEROUS_LINK_FOUND = "dangerous_link_found"


class ImageMatchError(AssertionError):
    """Assertion failure with a short message and a separate diagnostic body.

    str() gives only the short message so test reports stay scannable; the
    full multi-line diagnostic lives in ``detail``.
    """

    def __init__(self, kind: FailureKind, message: str, detail: str = ""):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
