"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from rmd_wrap.core.models import RenderPlan


class Workspace(Protocol):
    """Contract for the filesystem operations the pipeline needs.

    Any object that implements these methods with the correct
    signatures satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def is_file(self, path: str) -> bool:
        """Return ``True`` when *path* names an existing regular file."""
        ...  # pragma: no cover

    def resolve_directory(self, path: str) -> str:
        """Return the canonical absolute form of directory *path*.

        When the directory cannot be resolved (typically because it
        does not exist yet) *path* is returned unchanged.
        """
        ...  # pragma: no cover

    def make_directories(self, path: str) -> None:
        """Create *path* and any missing parents; no-op if it exists.

        Raises
        ------
        OutputDirectoryError
            When the directory cannot be created.
        """
        ...  # pragma: no cover


class RenderEngine(Protocol):
    """Contract for document rendering backends.

    Implementations wrap the actual renderer (e.g. ``Rscript`` running
    ``rmarkdown::render``) and must map start-up failures to
    :class:`~rmd_wrap.exceptions.RmdWrapError` subclasses.
    """

    def describe(self, plan: RenderPlan) -> str:
        """Return a human-readable rendition of the call for *plan*."""
        ...  # pragma: no cover

    def render(self, plan: RenderPlan) -> int:
        """Render *plan* synchronously and return the engine's exit status.

        Raises
        ------
        RenderFailedError
            When the engine cannot be started.
        """
        ...  # pragma: no cover
