"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem, the operating
system and R.  Every raw ``OSError`` must be caught here and re-raised
as a :class:`~rmd_wrap.exceptions.RmdWrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from rmd_wrap.infra.rscript_detector import (
    RscriptStatus,
    detect_pandoc,
    detect_rscript,
    probe_rmarkdown,
    require_rscript,
)
from rmd_wrap.infra.rscript_engine import RscriptEngine
from rmd_wrap.infra.workspace import LocalWorkspace

__all__: list[str] = [
    "LocalWorkspace",
    "RscriptEngine",
    "RscriptStatus",
    "detect_pandoc",
    "detect_rscript",
    "probe_rmarkdown",
    "require_rscript",
]
