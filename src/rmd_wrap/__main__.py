"""Allow ``python -m rmd_wrap`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m rmd_wrap`` behaves identically to the ``rmd-wrap``
console script.
"""

from __future__ import annotations

from rmd_wrap.cli.app import cli

if __name__ == "__main__":
    cli()
