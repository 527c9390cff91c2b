"""Rscript backed implementation of :class:`~rmd_wrap.core.protocols.RenderEngine`.

This module is the **only** place in the codebase that starts the
render process.  The R expression never contains user data: paths are
handed over as trailing command arguments and read back with
``commandArgs(trailingOnly = TRUE)``, so filenames with quotes or other
special characters need no escaping.
"""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path

from rmd_wrap.core.models import RenderPlan
from rmd_wrap.exceptions import RenderFailedError

RENDER_EXPRESSION: str = (
    "args <- commandArgs(trailingOnly = TRUE); "
    "rmarkdown::render("
    "input = args[1], "
    "output_format = args[2], "
    "output_file = args[3], "
    "output_dir = args[4], "
    "intermediates_dir = args[5], "
    "run_pandoc = TRUE, "
    "clean = FALSE)"
)
"""Positions in ``args`` follow :meth:`RenderPlan.render_arguments`."""


class RscriptEngine:
    """Concrete :class:`RenderEngine` running ``rmarkdown::render`` via Rscript.

    Parameters
    ----------
    executable:
        Path (or PATH-resolvable name) of the Rscript binary.
    """

    def __init__(self, executable: Path | str) -> None:
        self._executable: str = str(executable)

    def build_command(self, plan: RenderPlan) -> list[str]:
        """Return the argument vector for rendering *plan*."""
        return [
            self._executable,
            "-e",
            RENDER_EXPRESSION,
            *plan.render_arguments().values(),
        ]

    def describe(self, plan: RenderPlan) -> str:
        return shlex.join(self.build_command(plan))

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def render(self, plan: RenderPlan) -> int:
        """Run Rscript in the foreground and return its exit status.

        Output is not captured; R and pandoc write straight to the
        terminal.

        Raises
        ------
        RenderFailedError
            When the Rscript process cannot be started.
        """
        command = self.build_command(plan)
        try:
            completed = subprocess.run(command, check=False)
        except OSError as exc:
            raise RenderFailedError(
                f"Could not start {self._executable}: {exc.strerror or exc}",
                hint="Run 'rmd-wrap --doctor' to check your R installation.",
            ) from exc
        return completed.returncode
