"""CLI application entry point and command routing for rmd-wrap.

This module is the **sole error boundary** for the entire application.
It catches :class:`~rmd_wrap.exceptions.RmdWrapError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; the console proxies are
  used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import NoReturn

from rmd_wrap.cli import exit_codes
from rmd_wrap.cli.console import console, escape, out
from rmd_wrap.config import Settings
from rmd_wrap.core.models import RenderOptions
from rmd_wrap.core.naming import make_tag
from rmd_wrap.exceptions import ArgumentCountError, RmdWrapError, UsageError
from rmd_wrap.infra.rscript_detector import require_rscript
from rmd_wrap.utils.constants import DEFAULT_OUTPUT_FORMAT
from rmd_wrap.version import __version__

_DESCRIPTION = """\
A wrapper around R, rmarkdown::render, to render (R)md documents to pdf[html] documents (-f).
It takes a single (R)markdown file as input and generates a self-contained output doc.
All intermediate output is stored in a subdirectory with the same name as the
input filename (without extension).
Output directory name, output filename can be set explicitly by user (-d/-o).
Output dir/filename can be extended with an initial/date tag (-t).
"""

_EPILOG = """\
environment:
  RMD_WRAP_RSCRIPT    Rscript executable to run [default: Rscript]
  RMD_WRAP_TAG_LABEL  label used in -t tags [default: LP]
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that reports problems as :class:`UsageError`.

    argparse would otherwise print its own message and exit with
    status 2; routing through the error boundary keeps every usage
    failure at :data:`exit_codes.GENERAL_ERROR`.
    """

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``rmd-wrap [-d DIR] [-o FILE] [-f pdf|html] [-t] [-v] input-filename``
    * ``rmd-wrap --doctor``   — environment diagnostics
    * ``rmd-wrap --version``
    """
    parser = _ArgumentParser(
        prog="rmd-wrap",
        usage="%(prog)s -[doftvh] input-filename",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "-d",
        dest="output_dir",
        metavar="DIR",
        default=None,
        help="directory for all output files (unless -o)",
    )
    parser.add_argument(
        "-o",
        dest="output_file",
        metavar="FILE",
        default=None,
        help="filename of 'final' outputfile [default: same as input with different extension]",
    )
    parser.add_argument(
        "-f",
        dest="output_format",
        metavar="FORMAT",
        default=DEFAULT_OUTPUT_FORMAT,
        help="file format of output doc [default: pdf; options: pdf/html]",
    )
    parser.add_argument(
        "-t",
        dest="tag",
        action="store_true",
        help="add initial/date-tag to file/dir-names [default: no tags added]",
    )
    parser.add_argument(
        "-v",
        dest="verbose",
        action="store_true",
        help="verbose output",
    )
    parser.add_argument(
        "-h",
        "-?",
        dest="help",
        action="store_true",
        help="print this message",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="check that R, rmarkdown and pandoc are available",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="input-filename",
        help="last argument, Rmarkdown document",
    )
    return parser


def _print_usage() -> None:
    console.print(_build_parser().format_help(), plain=True)


def _options_from_args(
    args: argparse.Namespace,
    settings: Settings,
    now: datetime,
) -> RenderOptions:
    """Freeze the parsed namespace into :class:`RenderOptions`.

    Raises
    ------
    ArgumentCountError
        Unless exactly one input filename was given.
    """
    inputs: list[str] = args.inputs or []
    if len(inputs) != 1:
        raise ArgumentCountError(inputs)

    tag = ""
    if args.tag:
        tag = make_tag(now, settings.tag_label)

    return RenderOptions(
        input_name=inputs[0],
        output_dir=args.output_dir,
        output_file=args.output_file,
        output_format=args.output_format,
        tag=tag,
        verbose=args.verbose,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_render(options: RenderOptions, rscript: Path) -> int:
    """Dispatch a single render.

    Flow:
    1. Instantiate infra adapters + core service.
    2. Validate the input and derive the plan (creates directories).
    3. Run Rscript and hand back its exit status.
    """
    from rmd_wrap.core.render_service import RenderService
    from rmd_wrap.infra.rscript_engine import RscriptEngine
    from rmd_wrap.infra.workspace import LocalWorkspace

    service = RenderService(
        RscriptEngine(rscript),
        LocalWorkspace(),
        notify=lambda line: out.print(line, plain=True),
    )
    return service.run(options)


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from rmd_wrap.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the rmd-wrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)
    now = datetime.now()

    if args.help:
        _print_usage()
        return exit_codes.GENERAL_ERROR

    settings = Settings()

    if args.doctor:
        return _handle_doctor(settings)

    rscript = require_rscript(settings.rscript)
    options = _options_from_args(args, settings, now)
    return _handle_render(options, rscript)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except RmdWrapError as exc:
        console.print(
            f"[bold red]Error:[/bold red] {escape(str(exc))}", wrap=False, emoji=False,
        )
        if exc.hint:
            console.print(
                f"[yellow]Hint:[/yellow] {escape(exc.hint)}", wrap=False, emoji=False,
            )
        if exc.show_usage:
            console.print()
            _print_usage()
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}",
            emoji=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
