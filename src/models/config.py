"""Configuration models for the screenshot matcher."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class MatchConfig(BaseModel):
    # Baselines, searched in order relative to the suite's base directory
    expected_screenshots_dirs: list[str] = Field(
        default_factory=lambda: ["expected-screenshots"]
    )

    # Freshly captured screenshots
    processed_screenshots_dir: str = "processed-screenshots"
    store_in_ui_tests_repo: bool = False
    ui_tests_dir: Optional[str] = None

    # External comparison tool (ImageMagick)
    comparison_command: str = "compare"

    # Reporting
    missing_report_path: str = "missing-screenshots.json"

    @field_validator("expected_screenshots_dirs", mode="before")
    @classmethod
    def coerce_single_dir(cls, v):
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("expected_screenshots_dirs")
    @classmethod
    def require_expected_dir(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one expected screenshots directory is required")
        return v

    @model_validator(mode="after")
    def check_ui_tests_dir(self) -> "MatchConfig":
        if self.store_in_ui_tests_repo and not self.ui_tests_dir:
            raise ValueError("ui_tests_dir must be set when store_in_ui_tests_repo is enabled")
        return self

    @classmethod
    def load(cls, path: str | Path) -> "MatchConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
