"""Core render service — derives the render plan and drives the engine.

This service delegates filesystem access to a
:class:`~rmd_wrap.core.protocols.Workspace` and the actual rendering to
a :class:`~rmd_wrap.core.protocols.RenderEngine`, both injected at
construction time.  It is responsible for:

* Validating the input document (existence, then extension).
* Deriving the output directory, format and file, in that order.
* Announcing the render call and delegating to the engine.
* Ensuring only :class:`~rmd_wrap.exceptions.RmdWrapError` subclasses
  escape.

Guarantees
----------
* No ``print()`` — progress notices go through the ``notify`` callback.
* No direct filesystem or subprocess access.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from rmd_wrap.core.models import RenderOptions, RenderPlan
from rmd_wrap.core.naming import (
    classify_input_format,
    default_output_dir,
    default_output_file,
    resolve_output_format,
)
from rmd_wrap.core.protocols import RenderEngine, Workspace
from rmd_wrap.exceptions import InputFileNotFoundError, RenderFailedError, RmdWrapError


class RenderService:
    """Stateless service that turns options into one render call.

    Parameters
    ----------
    engine:
        Any object satisfying the :class:`RenderEngine` protocol.
    workspace:
        Any object satisfying the :class:`Workspace` protocol.
    notify:
        Optional callable receiving one progress line at a time.
    """

    def __init__(
        self,
        engine: RenderEngine,
        workspace: Workspace,
        *,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self._engine: RenderEngine = engine
        self._workspace: Workspace = workspace
        self._notify: Callable[[str], None] = notify or (lambda _line: None)

    # ------------------------------------------------------------------
    # Path helpers
    # ------------------------------------------------------------------

    def _absolute_path(self, path: str) -> str:
        """Resolve the directory part of *path* and re-attach the basename."""
        directory = os.path.dirname(path) or "."
        resolved = self._workspace.resolve_directory(directory)
        return os.path.join(resolved, os.path.basename(path))

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def plan(self, options: RenderOptions) -> RenderPlan:
        """Validate the input and derive every output path.

        Directories are created as they are derived, so a failure in a
        later step leaves earlier directories in place.

        Raises
        ------
        InputFileNotFoundError
            When the input is not an existing regular file.  Raised
            before any directory is created.
        UnsupportedExtensionError
            When the input extension is not recognised.
        UnsupportedFormatError
            When the requested output format is not recognised.
        OutputDirectoryError
            When a directory cannot be created.
        """
        if not self._workspace.is_file(options.input_name):
            raise InputFileNotFoundError(
                f"Rmarkdown file ({options.input_name}) doesn't exist.",
            )
        input_format = classify_input_format(options.input_name)
        input_file = self._absolute_path(options.input_name)

        output_dir = options.output_dir
        if output_dir is None:
            output_dir = default_output_dir(input_file, options.tag)
        self._workspace.make_directories(output_dir)
        self._notify(f"outdir = {output_dir}")
        output_dir = self._workspace.resolve_directory(output_dir)
        self._notify(f"outdir2 = {output_dir}")

        output_format = resolve_output_format(options.output_format)

        if options.output_file is None:
            output_file = default_output_file(
                input_file, output_dir, output_format, options.tag,
            )
        else:
            output_file = self._absolute_path(options.output_file)
        self._workspace.make_directories(os.path.dirname(output_file))
        if not os.path.isabs(output_file):
            # Parent did not exist before; it does now.
            output_file = self._absolute_path(output_file)

        return RenderPlan(
            input_file=input_file,
            input_format=input_format,
            output_dir=output_dir,
            output_format=output_format,
            output_file=output_file,
            tag=options.tag,
            verbose=options.verbose,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def describe_plan(self, plan: RenderPlan) -> list[str]:
        """Return one ``label = value`` line per derived setting."""
        return [
            f"input file = {plan.input_file}",
            f"input format = {plan.input_format}",
            f"output directory = {plan.output_dir}",
            f"output format = {plan.output_format.name} ({plan.output_format.engine_format})",
            f"output file = {plan.output_file}",
            f"tag = {plan.tag or '(none)'}",
        ]

    def render(self, plan: RenderPlan) -> int:
        """Announce and run the render call, returning its exit status.

        The status is passed through untouched; a non-zero value is
        not an error at this layer.

        Raises
        ------
        RenderFailedError
            When the engine cannot be started.
        """
        if plan.verbose:
            for line in self.describe_plan(plan):
                self._notify(line)
        self._notify(f"render command = {self._engine.describe(plan)}")
        try:
            return self._engine.render(plan)
        except RmdWrapError:
            # Already one of ours — propagate unchanged.
            raise
        except OSError as exc:
            raise RenderFailedError(
                f"Could not start the renderer: {exc}",
            ) from exc

    def run(self, options: RenderOptions) -> int:
        """Plan and render in one step."""
        return self.render(self.plan(options))
