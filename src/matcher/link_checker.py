"""Dangerous link scan — flags script-bearing anchor hrefs on the live page."""

from __future__ import annotations

import json
import logging
import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

logger = logging.getLogger(__name__)

DANGEROUS_SCHEME_RE = re.compile(r"^(javascript|vbscript|data):")
_JAVASCRIPT_BODY_RE = re.compile(r"javascript:(.*?);*")

ALLOWED_JAVASCRIPT = frozenset({
    "",
    "void(0)",
    "window.history.back()",
    "window.location.reload()",
})

# Errors inside the page are returned as the result so they surface as a
# visible failure instead of an evaluation exception.
COLLECT_LINKS_SCRIPT = """() => {
    try {
        const links = [];
        const elements = document.getElementsByTagName('a');
        for (let i = 0; i !== elements.length; ++i) {
            const element = elements.item(i);
            links.push({innerText: element.innerText, href: element.getAttribute('href')});
        }
        return JSON.stringify(links);
    } catch (e) {
        return (e && e.message) || String(e);
    }
}"""


def is_allowed_javascript(href: str) -> bool:
    m = _JAVASCRIPT_BODY_RE.fullmatch(href)
    if not m:
        return False
    return (m.group(1) or "") in ALLOWED_JAVASCRIPT


def is_dangerous_href(href: str | None) -> bool:
    if not href:
        return False
    return bool(DANGEROUS_SCHEME_RE.match(href)) and not is_allowed_javascript(href)


def find_dangerous_links(links: list[dict]) -> list[str]:
    """Describe each offending anchor as '<text> - [href = <href>]'."""
    found = []
    for link in links:
        href = link.get("href")
        if is_dangerous_href(href):
            found.append(f"{link.get('innerText') or ''} - [href = {href}]")
    return found


async def scan_dangerous_links(page: Page) -> str:
    """Return a JSON list of dangerous links; '[]' means the page is clean."""
    try:
        raw = await page.evaluate(COLLECT_LINKS_SCRIPT)
    except PlaywrightError as e:
        return str(e)

    try:
        links = json.loads(raw)
    except (TypeError, ValueError):
        return str(raw)
    if not isinstance(links, list):
        return str(raw)

    dangerous = find_dangerous_links(links)
    if dangerous:
        logger.warning("Found %d dangerous link(s) on %s", len(dangerous), page.url)
    return json.dumps(dangerous)
