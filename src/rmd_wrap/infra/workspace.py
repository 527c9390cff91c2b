"""Local filesystem implementation of :class:`~rmd_wrap.core.protocols.Workspace`."""

from __future__ import annotations

import os
from pathlib import Path

from rmd_wrap.exceptions import OutputDirectoryError


class LocalWorkspace:
    """Concrete :class:`Workspace` backed by the local filesystem.

    This class satisfies the :class:`~rmd_wrap.core.protocols.Workspace`
    protocol structurally — no explicit inheritance required.
    """

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def resolve_directory(self, path: str) -> str:
        """Canonicalize *path*, or return it unchanged if it is not a directory."""
        try:
            resolved = Path(path).resolve(strict=True)
        except (OSError, RuntimeError):
            return path
        if not resolved.is_dir():
            return path
        return str(resolved)

    def make_directories(self, path: str) -> None:
        """``mkdir -p`` semantics; existing directories are fine."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(
                f"Could not create directory {path}: {exc.strerror or exc}",
                hint="Check that the path is writable and not an existing file.",
            ) from exc
