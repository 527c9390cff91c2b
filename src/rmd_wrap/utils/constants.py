"""Constants shared across layers."""

from __future__ import annotations

DEFAULT_RSCRIPT: str = "Rscript"
"""R front-end used to evaluate the render expression."""

DEFAULT_TAG_LABEL: str = "LP"

TAG_TIMESTAMP_FORMAT: str = "%y%m%d_%H%M"
"""``strftime`` pattern of the timestamp part of a tag (``YYMMDD_HHMM``)."""

DEFAULT_OUTPUT_FORMAT: str = "pdf"

INPUT_EXTENSIONS: dict[str, str] = {
    "Rmd": "markdown",
    "md": "markdown",
    "Rhtml": "html",
}
"""Accepted input extensions (case-sensitive) and the format they imply."""
