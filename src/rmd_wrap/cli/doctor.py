"""``rmd-wrap --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can render documents: an Rscript on
PATH, the rmarkdown R package, and pandoc.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

from rmd_wrap.cli import exit_codes
from rmd_wrap.cli.console import console
from rmd_wrap.config import Settings
from rmd_wrap.infra.rscript_detector import (
    RscriptStatus,
    detect_pandoc,
    detect_rscript,
    probe_rmarkdown,
)
from rmd_wrap.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _rscript_check(status_obj: RscriptStatus) -> tuple[str, str, str]:
    """Return (label, value, status) for the Rscript row."""
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "Rscript", path_str, _OK
    return "Rscript", "not found", _FAIL


def _rmarkdown_check(rscript: Path | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the rmarkdown package row."""
    if rscript is None:
        return "rmarkdown", "skipped (no Rscript)", _WARN
    version = probe_rmarkdown(rscript)
    if version is None:
        return "rmarkdown", "NOT INSTALLED", _FAIL
    return "rmarkdown", version, _OK


def _pandoc_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the pandoc row.

    rmarkdown can use a pandoc bundled with RStudio, so a missing
    pandoc on PATH is only a warning.
    """
    path = detect_pandoc()
    if path is None:
        return "pandoc", "not on PATH", _WARN
    return "pandoc", str(path), _OK


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def _rmdwrap_version_check() -> tuple[str, str, str]:
    return "rmd-wrap", __version__, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nrmd-wrap doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_doctor_table(checks: list[tuple[str, str, str]]) -> bool:
    """Render doctor output with Rich; ``False`` when Rich is missing."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return False

    table = Table(
        title="rmd-wrap doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()
    return True


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    settings = settings or Settings()
    rscript_status = detect_rscript(settings.rscript)

    checks = [
        _rmdwrap_version_check(),
        _python_version_check(),
        _rscript_check(rscript_status),
        _rmarkdown_check(rscript_status.path),
        _pandoc_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = _print_rich_doctor_table(checks)
    if not rich_available:
        _print_plain_doctor_table(checks)

    # Show R install guidance when missing.
    if not rscript_status.found and rscript_status.install_commands:
        lines = [
            f"{settings.rscript} is not installed.",
            "Install R using one of the following commands:\n",
            *(f"  {cmd}" for cmd in rscript_status.install_commands),
            "",
        ]
        for line in lines:
            if rich_available:
                console.print(line, plain=True)
            else:
                print(line, file=sys.stderr)

    if has_failure:
        summary = "Some checks failed."
        markup = "[bold red]Some checks failed.[/bold red]"
    else:
        summary = "All checks passed."
        markup = "[bold green]All checks passed.[/bold green]"
    if rich_available:
        console.print(markup)
    else:
        print(summary, file=sys.stderr)

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
