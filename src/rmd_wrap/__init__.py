"""rmd-wrap — command-line wrapper around ``rmarkdown::render``.

Validates arguments, derives output paths and hands a single document
to ``Rscript`` with a strict layered architecture.
"""

from rmd_wrap.version import __version__

__all__: list[str] = ["__version__"]
