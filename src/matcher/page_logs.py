"""Page log collector — buffers console output and page errors for diagnostics."""

from __future__ import annotations

from pathlib import Path

from playwright.async_api import Page


class PageLogCollector:
    """Collects console messages and uncaught page errors for one page."""

    def __init__(self):
        self.logs: list[str] = []

    def setup_listeners(self, page: Page) -> None:
        """Attach console and pageerror listeners to a page."""
        page.on("console", lambda msg: self.logs.append(
            f"[{msg.type}] {msg.text}"
        ))
        page.on("pageerror", lambda err: self.logs.append(
            f"[pageerror] {err}"
        ))

    def clear(self) -> None:
        self.logs.clear()

    def save(self, path: Path) -> None:
        """Persist collected logs to a text file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write("\n".join(self.logs))
