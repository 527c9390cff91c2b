"""Custom exception hierarchy for rmd-wrap.

All exceptions that cross layer boundaries must inherit from
:class:`RmdWrapError`.  Raw ``OSError`` instances raised while touching
the filesystem or starting ``Rscript`` must be caught in the
infrastructure layer and re-raised as a typed subclass defined here.

Hierarchy
---------
RmdWrapError
├── UsageError
│   ├── ArgumentCountError
│   └── UnsupportedFormatError
├── InputFileNotFoundError
├── UnsupportedExtensionError
├── OutputDirectoryError
├── RenderFailedError
└── EnvironmentError
    └── RscriptNotFoundError
"""

from __future__ import annotations

from collections.abc import Sequence


class RmdWrapError(Exception):
    """Base exception for all rmd-wrap errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    show_usage: bool = False
    """Whether the CLI prints the usage text after the error message."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(RmdWrapError):
    """Raised for unknown options or malformed option values."""

    show_usage = True


class ArgumentCountError(UsageError):
    """Raised when anything other than one input filename remains."""

    def __init__(self, stray: Sequence[str]) -> None:
        lines = [
            "no, or too many, arguments left after options are parsed "
            "(should be a single (R)markdown filename):",
        ]
        lines.extend(f"  {arg}" for arg in stray)
        super().__init__("\n".join(lines))
        self.stray: tuple[str, ...] = tuple(stray)


class UnsupportedFormatError(UsageError):
    """Raised when ``-f`` names a format other than pdf/html."""


# --- Input document --------------------------------------------------------

class InputFileNotFoundError(RmdWrapError):
    """Raised when the input path does not name an existing regular file."""


class UnsupportedExtensionError(RmdWrapError):
    """Raised when the input extension maps to no known input format."""

    show_usage = True


# --- Output / rendering ----------------------------------------------------

class OutputDirectoryError(RmdWrapError):
    """Raised when an output directory cannot be created."""


class RenderFailedError(RmdWrapError):
    """Raised when the render process cannot be started at all."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(RmdWrapError):
    """Raised when a required runtime dependency is not available."""


class RscriptNotFoundError(EnvironmentError):
    """Raised when the Rscript executable cannot be located on PATH."""

    show_usage = True
