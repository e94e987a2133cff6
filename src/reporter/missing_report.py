"""Missing baseline report — lists screenshots that had no expected image."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from pydantic import BaseModel, Field

from src.models.match import MatchContext

logger = logging.getLogger(__name__)


class MissingReport(BaseModel):
    suite: str = ""
    generated_at: str = ""
    missing_expected: list[str] = Field(default_factory=list)


def generate_missing_report(context: MatchContext, output_path: Path) -> MissingReport:
    """Write the context's missing baselines as a JSON report."""
    report = MissingReport(
        suite=context.suite_title,
        generated_at=time.strftime("%Y-%m-%dT%H:%M:%SZ"),
        missing_expected=list(context.missing_expected),
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report.model_dump(), f, indent=2)

    if report.missing_expected:
        logger.warning("%d screenshot(s) have no expected image", len(report.missing_expected))
    logger.debug("Saved missing baseline report to %s", output_path)
    return report


def load_missing_report(path: Path) -> MissingReport:
    if not path.exists():
        raise FileNotFoundError(f"Missing baseline report not found: {path}")
    with open(path) as f:
        data = json.load(f)
    return MissingReport(**data)
