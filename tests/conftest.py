"""Shared pytest fixtures and configuration for the rmd-wrap test suite.

Guidelines
----------
* R is never required: ``shutil.which`` and ``subprocess.run`` are
  mocked at the infra boundary.
* Core tests must be pure — no side effects beyond ``tmp_path``.
* Tests must not depend on OS state or ``RMD_WRAP_*`` variables.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RMD_WRAP_RSCRIPT", raising=False)
    monkeypatch.delenv("RMD_WRAP_TAG_LABEL", raising=False)


@pytest.fixture
def rscript_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend every executable lives in ``/opt/fake-r/bin``."""
    monkeypatch.setattr(
        "rmd_wrap.infra.rscript_detector.shutil.which",
        lambda name: f"/opt/fake-r/bin/{name}",
    )


@pytest.fixture
def rscript_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "rmd_wrap.infra.rscript_detector.shutil.which",
        lambda name: None,
    )


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> Callable[[int], list[list[str]]]:
    """Replace ``subprocess.run`` in the engine; returns recorded commands.

    Call the fixture value with the return code the fake should report.
    """
    calls: list[list[str]] = []

    def _install(returncode: int = 0) -> list[list[str]]:
        def _run(cmd: list[str], **_kwargs: Any) -> subprocess.CompletedProcess[str]:
            calls.append(list(cmd))
            return subprocess.CompletedProcess(cmd, returncode)

        monkeypatch.setattr("rmd_wrap.infra.rscript_engine.subprocess.run", _run)
        return calls

    return _install
