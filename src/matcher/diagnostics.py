"""Failure diagnostics for screenshot assertions."""

from __future__ import annotations

from pathlib import Path

from src.models.match import DiagnosticRecord, ResolvedPaths

INDENT = "     "


def format_page_logs(page_logs: list[str], indent: str = INDENT) -> str:
    """Render the page's console output, re-indenting multi-line messages."""
    if not page_logs:
        return ""
    lines = [indent + "Rendering logs:"]
    for message in page_logs:
        lines.append(indent + "  " + message.replace("\n", "\n" + indent + "  "))
    return "\n\n" + "\n".join(lines)


def build_record(
    message: str,
    reproduction_url: str,
    paths: ResolvedPaths,
    page_logs: list[str] | None = None,
) -> DiagnosticRecord:
    return DiagnosticRecord(
        message=message,
        reproduction_url=reproduction_url,
        processed_path=str(paths.processed_path),
        processed_found=paths.processed_path.is_file(),
        expected_path=str(paths.expected_path),
        expected_found=paths.expected_path.is_file(),
        page_logs=list(page_logs or []),
    )


def _path_line(path: str, found: bool) -> str:
    if found:
        return str(Path(path).resolve())
    return path + " (not found)"


def build_diagnostic(record: DiagnosticRecord, indent: str = INDENT) -> str:
    text = record.message + "\n"
    text += indent + "Url to reproduce: " + record.reproduction_url + "\n"
    text += indent + "Generated screenshot: " + _path_line(record.processed_path, record.processed_found) + "\n"
    text += indent + "Expected screenshot: " + _path_line(record.expected_path, record.expected_found) + "\n"
    text += format_page_logs(record.page_logs, indent)
    return text
