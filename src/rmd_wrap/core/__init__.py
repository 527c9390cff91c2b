"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or subprocess access (go through protocols).
* No imports from ``cli`` or ``infra``.
"""

from rmd_wrap.core.models import OutputFormat, RenderOptions, RenderPlan
from rmd_wrap.core.protocols import RenderEngine, Workspace
from rmd_wrap.core.render_service import RenderService

__all__: list[str] = [
    "OutputFormat",
    "RenderEngine",
    "RenderOptions",
    "RenderPlan",
    "RenderService",
    "Workspace",
]
