"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exported: :data:`console` writes diagnostics (errors,
hints, usage, doctor output) to stderr, and :data:`out` writes progress
notices to stdout.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from rmd_wrap.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def escape(text: str) -> str:
	"""Escape Rich markup in *text*; unchanged when Rich is absent."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def _stream(self) -> TextIO:
		return sys.stderr if self._stderr else sys.stdout

	def print(
		self,
		*objects: object,
		plain: bool = False,
		wrap: bool = True,
		emoji: bool = True,
	) -> None:
		"""Render with Rich when available, else plain print.

		``plain=True`` disables markup, emoji codes, highlighting and wrapping, for
		paths and commands that must come out verbatim.  ``wrap=False``
		keeps markup but never breaks long lines.  ``emoji=False`` leaves
		``:name:`` codes untouched, for text that quotes user input.
		"""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=self._stream())
			return
		if plain:
			rich_console.print(
				*objects, markup=False, emoji=False, highlight=False, soft_wrap=True,
			)
		else:
			rich_console.print(*objects, soft_wrap=not wrap, emoji=emoji)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
