"""Pure naming and format rules.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic (the clock is passed in), and
trivially unit-testable.

Extension handling follows "after the last dot of the basename": a
name without a dot has an empty extension, and stripping an extension
only ever removes the final ``.suffix``.
"""

from __future__ import annotations

import os
from datetime import datetime

from rmd_wrap.core.models import InputFormat, OutputFormat
from rmd_wrap.exceptions import UnsupportedExtensionError, UnsupportedFormatError
from rmd_wrap.utils.constants import INPUT_EXTENSIONS, TAG_TIMESTAMP_FORMAT

OUTPUT_FORMATS: dict[str, OutputFormat] = {
    "pdf": OutputFormat(name="pdf", engine_format="pdf_document", extension="pdf"),
    "html": OutputFormat(name="html", engine_format="html_document", extension="html"),
}


# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------

def input_extension(path: str) -> str:
    """Return the text after the last ``.`` of the basename, or ``""``."""
    base = os.path.basename(path)
    _stem, dot, ext = base.rpartition(".")
    return ext if dot else ""


def strip_extension(path: str) -> str:
    """Drop the final ``.suffix`` of *path*; leave dot-less names alone."""
    base = os.path.basename(path)
    if "." not in base:
        return path
    return path[: path.rfind(".")]


def classify_input_format(path: str) -> InputFormat:
    """Map the extension of *path* to an input format.

    Raises
    ------
    UnsupportedExtensionError
        When the extension is not one of ``Rmd``, ``md``, ``Rhtml``.
    """
    ext = input_extension(path)
    fmt = INPUT_EXTENSIONS.get(ext)
    if fmt is None:
        allowed = ", ".join(INPUT_EXTENSIONS)
        raise UnsupportedExtensionError(
            f"filename extension ({ext}) unknown; allowed extensions are: {allowed}.",
        )
    return fmt  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------

def resolve_output_format(name: str) -> OutputFormat:
    """Look up the :class:`OutputFormat` for a ``-f`` value.

    Raises
    ------
    UnsupportedFormatError
        For anything other than ``pdf`` or ``html``.
    """
    try:
        return OUTPUT_FORMATS[name]
    except KeyError:
        allowed = "/".join(OUTPUT_FORMATS)
        raise UnsupportedFormatError(
            f"supplied output format ({name}) is not allowed "
            f"(allowed options are: {allowed}).",
        ) from None


# ---------------------------------------------------------------------------
# Tags and default names
# ---------------------------------------------------------------------------

def make_tag(now: datetime, label: str) -> str:
    """Build a tag such as ``_LP190419_1432``."""
    return f"_{label}{now.strftime(TAG_TIMESTAMP_FORMAT)}"


def default_output_dir(input_file: str, tag: str) -> str:
    return strip_extension(input_file) + tag


def default_output_file(
    input_file: str,
    output_dir: str,
    output_format: OutputFormat,
    tag: str,
) -> str:
    """``<output_dir>/<input stem><tag>.<extension>``."""
    stem = strip_extension(os.path.basename(input_file))
    return os.path.join(output_dir, f"{stem}{tag}.{output_format.extension}")
