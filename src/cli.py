"""CLI entry point for the screenshot matcher."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
from playwright.async_api import async_playwright
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from src.matcher.comparator import compare_images
from src.matcher.errors import ImageMatchError
from src.matcher.link_checker import scan_dangerous_links
from src.models.config import MatchConfig
from src.reporter.missing_report import load_missing_report

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config: str) -> MatchConfig:
    if not Path(config).exists():
        return MatchConfig()
    return MatchConfig.load(config)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Screenshot baseline matching for end-to-end browser tests"""
    setup_logging(verbose)


@cli.command()
def init() -> None:
    """Create a default configuration file."""
    config_path = Path("screenshot-config.json")
    if config_path.exists():
        if not click.confirm("screenshot-config.json already exists. Overwrite?"):
            return

    MatchConfig().save(config_path)
    console.print(f"[green]Created {config_path}[/green]")


@cli.command()
@click.argument("expected", type=click.Path())
@click.argument("processed", type=click.Path())
@click.option("--config", "-c", default="screenshot-config.json", help="Config file path")
def compare(expected: str, processed: str, config: str) -> None:
    """Compare two screenshots with the configured comparison tool."""
    cfg = _load_config(config)
    try:
        result = asyncio.run(
            compare_images(Path(expected), Path(processed), command=cfg.comparison_command)
        )
    except ImageMatchError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        sys.exit(2)

    if result.matched:
        console.print("[green]Screenshots match[/green]")
        return
    pixels = "unknown" if result.pixel_error is None else str(result.pixel_error)
    console.print(f"[red]Screenshots differ:[/red] pixel error {pixels}")
    sys.exit(1)


async def _check_links(url: str) -> str:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            await page.goto(url, wait_until="load")
            return await scan_dangerous_links(page)
        finally:
            await browser.close()


@cli.command("check-links")
@click.argument("url")
def check_links(url: str) -> None:
    """Scan a page for javascript:, vbscript: and data: links."""
    result = asyncio.run(_check_links(url))
    if result == "[]":
        console.print("[green]No dangerous links found[/green]")
        return
    try:
        links = json.loads(result)
    except ValueError:
        links = [result]
    for link in links:
        console.print(f"  [red]{escape(link)}[/red]")
    sys.exit(1)


@cli.command()
@click.option("--report", "-r", default=None, help="Missing baseline report path")
@click.option("--config", "-c", default="screenshot-config.json", help="Config file path")
def missing(report: str | None, config: str) -> None:
    """List screenshots that had no expected image."""
    report_path = Path(report or _load_config(config).missing_report_path)
    try:
        data = load_missing_report(report_path)
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if not data.missing_expected:
        console.print("[green]No missing expected screenshots[/green]")
        return

    table = Table(title=f"Missing expected screenshots ({data.suite or 'all suites'})")
    table.add_column("#", style="bold")
    table.add_column("Image")
    for i, name in enumerate(data.missing_expected, 1):
        table.add_row(str(i), escape(name))
    console.print(table)


if __name__ == "__main__":
    cli()
