"""Domain models for rmd-wrap.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  The parser builds a :class:`RenderOptions`
once, the render service turns it into a :class:`RenderPlan`, and the
engine consumes the plan.  Nothing is mutated along the way.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

InputFormat = Literal["markdown", "html"]


# ---------------------------------------------------------------------------
# Output format descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OutputFormat:
    """A user-facing output format and its rmarkdown counterpart."""

    name: str
    """Short name accepted by ``-f`` (e.g. ``pdf``)."""

    engine_format: str
    """rmarkdown format identifier (e.g. ``pdf_document``)."""

    extension: str
    """File extension of the final document, without the dot."""


# ---------------------------------------------------------------------------
# Parsed command line
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options exactly as given on the command line.

    ``output_dir`` and ``output_file`` are ``None`` when the user did not
    supply them; defaults are derived later, once the input is known.
    """

    input_name: str
    """Input filename as typed by the user (may be relative)."""

    output_dir: str | None = None
    output_file: str | None = None
    output_format: str = "pdf"

    tag: str = ""
    """Name suffix computed at parse time, empty when ``-t`` is absent."""

    verbose: bool = False


# ---------------------------------------------------------------------------
# Fully derived render configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Everything needed for one delegated render call.

    All paths are absolute, and both :attr:`output_dir` and the parent
    of :attr:`output_file` exist by the time a plan is handed out.
    """

    input_file: str
    input_format: InputFormat
    output_dir: str
    """Intermediates directory passed to the engine."""

    output_format: OutputFormat
    output_file: str
    tag: str = ""
    verbose: bool = False

    @property
    def output_parent(self) -> str:
        """Directory that receives the final document."""
        return os.path.dirname(self.output_file)

    def render_arguments(self) -> dict[str, str]:
        """Return the named engine parameters in call order."""
        return {
            "input": self.input_file,
            "output_format": self.output_format.engine_format,
            "output_file": self.output_file,
            "output_dir": self.output_parent,
            "intermediates_dir": self.output_dir,
        }
