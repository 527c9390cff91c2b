"""Tests for the render pipeline (core/render_service.py).

The engine is a recording fake; the workspace is the real
:class:`LocalWorkspace` pointed at ``tmp_path`` so directory creation
and path resolution are exercised for real.

Coverage:
* Default output directory / file derivation.
* Tagged names.
* User-supplied ``-d`` / ``-o`` (relative and absolute).
* Idempotent directory creation.
* Input validation order (missing file before anything is created).
* Progress notices and verbose plan output.
* Exit-status pass-through and start-up error wrapping.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import pytest

from rmd_wrap.core.models import RenderOptions, RenderPlan
from rmd_wrap.core.render_service import RenderService
from rmd_wrap.exceptions import (
    InputFileNotFoundError,
    OutputDirectoryError,
    RenderFailedError,
    UnsupportedExtensionError,
    UnsupportedFormatError,
)
from rmd_wrap.infra.workspace import LocalWorkspace


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class _FakeEngine:
    def __init__(self, returncode: int = 0, error: Exception | None = None) -> None:
        self.returncode = returncode
        self.error = error
        self.rendered: list[RenderPlan] = []

    def describe(self, plan: RenderPlan) -> str:
        return f"fake-render {plan.input_file}"

    def render(self, plan: RenderPlan) -> int:
        if self.error is not None:
            raise self.error
        self.rendered.append(plan)
        return self.returncode


def _service(
    engine: _FakeEngine | None = None,
) -> tuple[RenderService, _FakeEngine, list[str]]:
    engine = engine or _FakeEngine()
    lines: list[str] = []
    return RenderService(engine, LocalWorkspace(), notify=lines.append), engine, lines


@pytest.fixture
def source(tmp_path: Path) -> Path:
    """An existing ``<tmp>/x/report.Rmd``, with symlinks resolved."""
    base = tmp_path.resolve() / "x"
    base.mkdir()
    path = base / "report.Rmd"
    path.write_text("# Title\n")
    return path


# ---------------------------------------------------------------------------
# Default derivation
# ---------------------------------------------------------------------------

class TestDefaultPlan:
    def test_default_directory_and_file(self, source: Path) -> None:
        service, _, _ = _service()
        plan = service.plan(RenderOptions(input_name=str(source)))

        expected_dir = source.parent / "report"
        assert plan.input_file == str(source)
        assert plan.input_format == "markdown"
        assert plan.output_dir == str(expected_dir)
        assert plan.output_file == str(expected_dir / "report.pdf")
        assert expected_dir.is_dir()

    def test_html_output(self, source: Path) -> None:
        service, _, _ = _service()
        plan = service.plan(RenderOptions(input_name=str(source), output_format="html"))
        assert plan.output_format.engine_format == "html_document"
        assert plan.output_file.endswith(os.sep + "report.html")

    def test_relative_input_is_made_absolute(
        self, source: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(source.parent)
        service, _, _ = _service()
        plan = service.plan(RenderOptions(input_name="report.Rmd"))
        assert plan.input_file == str(source)
        assert os.path.isabs(plan.output_dir)

    def test_tag_appears_in_directory_and_file(self, source: Path) -> None:
        service, _, _ = _service()
        tag = "_LP190419_0905"
        plan = service.plan(RenderOptions(input_name=str(source), tag=tag))

        assert plan.output_dir == str(source.parent / f"report{tag}")
        assert os.path.basename(plan.output_file) == f"report{tag}.pdf"
        pattern = re.compile(r"_LP\d{6}_\d{4}")
        assert pattern.search(plan.output_dir).group(0) == tag  # type: ignore[union-attr]
        assert pattern.search(os.path.basename(plan.output_file)).group(0) == tag  # type: ignore[union-attr]

    def test_existing_directory_is_fine(self, source: Path) -> None:
        service, _, _ = _service()
        first = service.plan(RenderOptions(input_name=str(source)))
        second = service.plan(RenderOptions(input_name=str(source)))
        assert first == second


# ---------------------------------------------------------------------------
# User-supplied paths
# ---------------------------------------------------------------------------

class TestExplicitPaths:
    def test_output_dir_option(self, source: Path, tmp_path: Path) -> None:
        target = tmp_path.resolve() / "build" / "nested"
        service, _, _ = _service()
        plan = service.plan(RenderOptions(input_name=str(source), output_dir=str(target)))

        assert target.is_dir()
        assert plan.output_dir == str(target)
        assert plan.output_file == str(target / "report.pdf")

    def test_relative_output_dir_is_resolved(
        self, source: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        service, _, lines = _service()
        plan = service.plan(RenderOptions(input_name=str(source), output_dir="work"))

        assert plan.output_dir == str(tmp_path.resolve() / "work")
        assert "outdir = work" in lines
        assert f"outdir2 = {tmp_path.resolve() / 'work'}" in lines

    def test_output_file_in_new_directory(
        self, source: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        service, _, _ = _service()
        plan = service.plan(
            RenderOptions(input_name=str(source), output_file="final/out.pdf"),
        )

        expected = tmp_path.resolve() / "final" / "out.pdf"
        assert plan.output_file == str(expected)
        assert plan.output_parent == str(expected.parent)
        assert expected.parent.is_dir()
        # Intermediates still go to the default directory.
        assert plan.output_dir == str(source.parent / "report")

    def test_output_file_extension_is_kept_verbatim(self, source: Path, tmp_path: Path) -> None:
        target = tmp_path.resolve() / "custom.name"
        service, _, _ = _service()
        plan = service.plan(
            RenderOptions(input_name=str(source), output_file=str(target), output_format="html"),
        )
        assert plan.output_file == str(target)

    def test_output_dir_blocked_by_file(self, source: Path, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        service, _, _ = _service()
        with pytest.raises(OutputDirectoryError):
            service.plan(RenderOptions(input_name=str(source), output_dir=str(blocker / "sub")))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_missing_input_creates_nothing(self, tmp_path: Path) -> None:
        missing = tmp_path / "ghost.Rmd"
        before = sorted(tmp_path.iterdir())
        service, _, _ = _service()

        with pytest.raises(InputFileNotFoundError, match="ghost.Rmd"):
            service.plan(RenderOptions(input_name=str(missing)))
        assert sorted(tmp_path.iterdir()) == before

    def test_directory_is_not_an_input_file(self, tmp_path: Path) -> None:
        folder = tmp_path / "folder.Rmd"
        folder.mkdir()
        service, _, _ = _service()
        with pytest.raises(InputFileNotFoundError):
            service.plan(RenderOptions(input_name=str(folder)))

    def test_bad_extension(self, tmp_path: Path) -> None:
        doc = tmp_path / "notes.txt"
        doc.write_text("")
        service, _, _ = _service()
        with pytest.raises(UnsupportedExtensionError, match=r"\(txt\)"):
            service.plan(RenderOptions(input_name=str(doc)))
        assert not (tmp_path / "notes").exists()

    def test_bad_format_after_output_dir(self, source: Path) -> None:
        service, _, _ = _service()
        with pytest.raises(UnsupportedFormatError, match=r"\(docx\)"):
            service.plan(RenderOptions(input_name=str(source), output_format="docx"))
        # The output directory step precedes format validation.
        assert (source.parent / "report").is_dir()

    def test_rhtml_input(self, tmp_path: Path) -> None:
        doc = tmp_path / "page.Rhtml"
        doc.write_text("<html></html>")
        service, _, _ = _service()
        assert service.plan(RenderOptions(input_name=str(doc))).input_format == "html"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestRender:
    def test_notices_in_order(self, source: Path) -> None:
        service, engine, lines = _service()
        code = service.run(RenderOptions(input_name=str(source)))

        assert code == 0
        assert len(engine.rendered) == 1
        assert lines[0].startswith("outdir = ")
        assert lines[1].startswith("outdir2 = ")
        assert lines[-1] == f"render command = fake-render {source}"

    def test_verbose_lists_plan(self, source: Path) -> None:
        service, _, lines = _service()
        service.run(RenderOptions(input_name=str(source), verbose=True))
        assert f"input file = {source}" in lines
        assert "input format = markdown" in lines
        assert "output format = pdf (pdf_document)" in lines
        assert "tag = (none)" in lines

    def test_quiet_by_default(self, source: Path) -> None:
        service, _, lines = _service()
        service.run(RenderOptions(input_name=str(source)))
        assert not any(line.startswith("input file = ") for line in lines)

    def test_exit_status_passes_through(self, source: Path) -> None:
        service, _, _ = _service(_FakeEngine(returncode=7))
        assert service.run(RenderOptions(input_name=str(source))) == 7

    def test_os_error_is_wrapped(self, source: Path) -> None:
        service, _, _ = _service(_FakeEngine(error=PermissionError("denied")))
        with pytest.raises(RenderFailedError, match="denied"):
            service.run(RenderOptions(input_name=str(source)))

    def test_own_errors_propagate_unchanged(self, source: Path) -> None:
        original = RenderFailedError("engine said no")
        service, _, _ = _service(_FakeEngine(error=original))
        with pytest.raises(RenderFailedError) as exc_info:
            service.run(RenderOptions(input_name=str(source)))
        assert exc_info.value is original

    def test_notify_is_optional(self, source: Path) -> None:
        service = RenderService(_FakeEngine(), LocalWorkspace())
        assert service.run(RenderOptions(input_name=str(source))) == 0
