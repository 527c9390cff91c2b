"""Infrastructure: Rscript detection and platform guidance.

This module is responsible for locating the R front-end (and, for the
diagnostics command, pandoc and the rmarkdown package) and providing
platform-specific installation guidance when R is missing.

Rules
-----
* Detection via :func:`shutil.which` only; :func:`probe_rmarkdown` is
  the one place that asks R itself.
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from rmd_wrap.exceptions import RscriptNotFoundError
from rmd_wrap.utils.constants import DEFAULT_RSCRIPT

RMARKDOWN_VERSION_EXPRESSION: str = 'cat(as.character(packageVersion("rmarkdown")))'

PROBE_TIMEOUT_SECONDS: float = 60.0


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RscriptStatus:
    """Result of an Rscript detection probe.

    Attributes
    ----------
    found : bool
        Whether Rscript was located on PATH.
    path : Path | None
        Absolute path to the Rscript binary, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing R on the current
        platform.  Empty when Rscript is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_rscript(executable: str = DEFAULT_RSCRIPT) -> RscriptStatus:
    """Probe the system for *executable*.

    Returns a :class:`RscriptStatus` regardless of whether Rscript is
    present — the caller decides whether to abort or merely report.
    """
    result = shutil.which(executable)

    if result is not None:
        resolved = Path(result).resolve()
        return RscriptStatus(
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return RscriptStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(),
    )


def require_rscript(executable: str = DEFAULT_RSCRIPT) -> Path:
    """Locate Rscript or raise :class:`RscriptNotFoundError`."""
    status = detect_rscript(executable)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install R using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise RscriptNotFoundError(
            f"{executable} command not found",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


def detect_pandoc() -> Path | None:
    """Return the pandoc binary on PATH, or ``None``."""
    result = shutil.which("pandoc")
    return Path(result).resolve() if result is not None else None


def probe_rmarkdown(rscript: Path) -> str | None:
    """Ask R for the installed rmarkdown version.

    Returns ``None`` when the package is missing or R cannot be run.
    """
    try:
        completed = subprocess.run(
            [str(rscript), "-e", RMARKDOWN_VERSION_EXPRESSION],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if completed.returncode != 0:
        return None
    version = completed.stdout.strip()
    return version or None


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install RProject.R",
            "choco install r.project",
        )
    if system == "linux":
        return (
            "sudo apt install r-base",
            "sudo dnf install R",
            "sudo pacman -S r",
        )
    if system == "darwin":
        return ("brew install r",)
    # Fallback — generic guidance.
    return ("Please install R from https://cran.r-project.org/",)
