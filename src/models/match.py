"""Data structures for a single screenshot match assertion."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from src.models.config import MatchConfig


class MatchContext(BaseModel):
    """Per-suite state threaded through every match_image call."""
    config: MatchConfig = Field(default_factory=MatchConfig)
    suite_title: str = ""
    base_directory: str = "."
    missing_expected: list[str] = Field(default_factory=list)

    def record_missing(self, image_name: str) -> None:
        self.missing_expected.append(image_name)


class ComparisonRequest(BaseModel):
    image_name: str
    compare_against: Optional[str] = None
    comparison_threshold: Optional[float] = None
    prefix: Optional[str] = None

    @classmethod
    def coerce(cls, params: str | dict[str, Any] | "ComparisonRequest") -> "ComparisonRequest":
        """Accept a bare image name, a dict of fields, or a request."""
        if isinstance(params, cls):
            return params
        if isinstance(params, str):
            return cls(image_name=params)
        return cls(**params)

    def resolve_names(self, suite_title: str) -> tuple[str, str]:
        """Return (processed name, baseline name) before extension handling.

        The prefix defaults to the suite title. An explicit compare_against
        is used as given; otherwise the baseline shares the prefixed name.
        """
        prefix = self.prefix or suite_title
        image_name = f"{prefix}_{self.image_name}"
        return image_name, self.compare_against or image_name


class ResolvedPaths(BaseModel):
    expected_path: Path
    processed_path: Path


class ComparisonResult(BaseModel):
    pixel_error: Optional[int] = None  # None when the tool exited non-zero
    matched: bool = False


class DiagnosticRecord(BaseModel):
    message: str
    reproduction_url: str = ""
    processed_path: str
    processed_found: bool = False
    expected_path: str
    expected_found: bool = False
    page_logs: list[str] = Field(default_factory=list)
