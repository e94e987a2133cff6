"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Page

from src.models.config import MatchConfig
from src.models.match import MatchContext


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def match_config() -> MatchConfig:
    """Create a test matcher configuration."""
    return MatchConfig(
        expected_screenshots_dirs=["expected-screenshots"],
        processed_screenshots_dir="processed-screenshots",
    )


@pytest.fixture
def suite_dir(tmp_path: Path) -> Path:
    """Create a temporary suite base directory."""
    base = tmp_path / "suite"
    base.mkdir()
    return base


@pytest.fixture
def match_context(match_config: MatchConfig, suite_dir: Path) -> MatchContext:
    """Create a match context rooted at the temporary suite directory."""
    return MatchContext(
        config=match_config,
        suite_title="Dashboard",
        base_directory=str(suite_dir),
    )


@pytest.fixture
def expected_dir(suite_dir: Path) -> Path:
    """Create the expected screenshots directory."""
    path = suite_dir / "expected-screenshots"
    path.mkdir()
    return path


@pytest.fixture
def temp_config_file(match_config: MatchConfig, tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_file = tmp_path / "screenshot-config.json"
    match_config.save(config_file)
    return config_file


# ============================================================================
# Browser Fixtures
# ============================================================================


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock Playwright page with no links."""
    page = AsyncMock(spec=Page)
    page.url = "https://example.com/index.php?module=Dashboard"
    page.evaluate = AsyncMock(return_value="[]")
    page.on = MagicMock()
    return page


# ============================================================================
# Subprocess Fixtures
# ============================================================================


@pytest.fixture
def make_process():
    """Factory for fake asyncio subprocesses."""
    def _make(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
        proc = MagicMock()
        proc.returncode = returncode
        proc.communicate = AsyncMock(return_value=(stdout, stderr))
        return proc
    return _make
