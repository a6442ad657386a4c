"""Tests for the script resolver."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

from boots.execution.resolver import describe_report, resolve_script, resolve_scripts
from boots.models.enums import ResolutionStatus
from tests.fakes import FakeScript, as_module, dict_loader

# ---------------------------------------------------------------------------
# Single identifier
# ---------------------------------------------------------------------------


def test_resolve_direct(journal: list[str], tmp_path: Path) -> None:
    script = FakeScript("a", journal)
    loader = dict_loader({"a": as_module(script)})

    resolution = resolve_script("a", base_dir=tmp_path, loader=loader)

    assert resolution.status == ResolutionStatus.RESOLVED
    assert resolution.ok is True
    assert resolution.script is script
    assert resolution.reason is None


def test_resolve_falls_back_to_base_dir(journal: list[str], tmp_path: Path) -> None:
    script = FakeScript("a", journal)
    calls: list[str] = []
    modules = {str(tmp_path / "a"): as_module(script)}
    inner = dict_loader(modules)

    def loader(identifier: str) -> object:
        calls.append(identifier)
        return inner(identifier)

    resolution = resolve_script("a", base_dir=tmp_path, loader=loader)

    assert resolution.script is script
    assert calls == ["a", str(tmp_path / "a")]


def test_resolve_unresolvable_after_both_attempts(tmp_path: Path) -> None:
    calls: list[str] = []

    def loader(identifier: str) -> object:
        calls.append(identifier)
        raise ModuleNotFoundError(identifier)

    resolution = resolve_script("ghost", base_dir=tmp_path, loader=loader)

    assert resolution.status == ResolutionStatus.UNRESOLVABLE
    assert resolution.script is None
    assert "ModuleNotFoundError" in resolution.reason
    assert len(calls) == 2


def test_resolve_missing_export(tmp_path: Path) -> None:
    loader = dict_loader({"x": SimpleNamespace(other=1)})

    resolution = resolve_script("x", base_dir=tmp_path, loader=loader)

    assert resolution.status == ResolutionStatus.WRONG_SHAPE
    assert resolution.reason == "no 'script' export"


def test_resolve_non_callable_run_is_wrong_shape(tmp_path: Path) -> None:
    loader = dict_loader({"x": as_module(SimpleNamespace(name="x", run=3))})

    resolution = resolve_script("x", base_dir=tmp_path, loader=loader)

    assert resolution.status == ResolutionStatus.WRONG_SHAPE
    assert "not callable" in resolution.reason


def test_resolve_custom_export_name(journal: list[str], tmp_path: Path) -> None:
    script = FakeScript("a", journal)
    loader = dict_loader({"a": SimpleNamespace(bootstrap=script)})

    assert resolve_script("a", base_dir=tmp_path, loader=loader).status == ResolutionStatus.WRONG_SHAPE
    assert resolve_script("a", base_dir=tmp_path, export_name="bootstrap", loader=loader).script is script


# ---------------------------------------------------------------------------
# Whole list
# ---------------------------------------------------------------------------


def test_resolve_scripts_preserves_order(journal: list[str], tmp_path: Path) -> None:
    names = ["c", "a", "b"]
    loader = dict_loader({n: as_module(FakeScript(n, journal)) for n in names})

    report = resolve_scripts(names, base_dir=tmp_path, loader=loader)

    assert report.ok is True
    assert [s.name for s in report.scripts] == names
    assert report.unresolvable == []
    assert report.wrong_shape == []


def test_resolve_scripts_collects_every_problem(journal: list[str], tmp_path: Path) -> None:
    loader = dict_loader(
        {
            "good": as_module(FakeScript("good", journal)),
            "shape1": as_module(SimpleNamespace(name="shape1")),
            "shape2": SimpleNamespace(),
        }
    )

    report = resolve_scripts(
        ["missing1", "shape1", "good", "missing2", "shape2"],
        base_dir=tmp_path,
        loader=loader,
    )

    assert report.ok is False
    assert report.unresolvable == ["missing1", "missing2"]
    assert report.wrong_shape == ["shape1", "shape2"]
    assert [s.name for s in report.scripts] == ["good"]
    assert [r.identifier for r in report.resolutions] == ["missing1", "shape1", "good", "missing2", "shape2"]
    assert journal == []


def test_describe_report(tmp_path: Path) -> None:
    loader = dict_loader({"x": SimpleNamespace()})
    report = resolve_scripts(["x", "y"], base_dir=tmp_path, loader=loader)

    lines = describe_report(report)

    assert lines == [
        "Could not resolve the following paths: ['y']",
        "The following modules had no export implementing BootsScript: ['x']",
    ]


def test_describe_report_only_non_empty_fields(tmp_path: Path) -> None:
    report = resolve_scripts(["y"], base_dir=tmp_path, loader=dict_loader({}))
    assert describe_report(report) == ["Could not resolve the following paths: ['y']"]


# ---------------------------------------------------------------------------
# Real files
# ---------------------------------------------------------------------------


def test_resolve_relative_file_under_base_dir(
    write_script: Callable[[str, str], Path],
    ok_script_source: Callable[[str], str],
    tmp_path: Path,
) -> None:
    write_script("seeds/boots_seed_users.py", ok_script_source("seed-users"))

    report = resolve_scripts(["seeds/boots_seed_users.py", "seeds/boots_seed_users"], base_dir=tmp_path)

    assert report.ok is True
    assert [s.name for s in report.scripts] == ["seed-users", "seed-users"]
    assert report.scripts[0] is not report.scripts[1]


def test_resolve_file_with_wrong_shape(write_script: Callable[[str, str], Path], tmp_path: Path) -> None:
    path = write_script("boots_no_run.py", "script = {'name': 'x'}\n")

    report = resolve_scripts([str(path)], base_dir=tmp_path)

    assert report.wrong_shape == [str(path)]
    assert report.unresolvable == []


def test_resolve_file_that_fails_to_import(write_script: Callable[[str, str], Path], tmp_path: Path) -> None:
    write_script("boots_syntax_error.py", "def broken(:\n")

    report = resolve_scripts(["boots_syntax_error.py"], base_dir=tmp_path)

    assert report.unresolvable == ["boots_syntax_error.py"]
    assert "SyntaxError" in report.resolutions[0].reason


def test_resolve_module_exiting_at_import_is_unresolvable(
    write_script: Callable[[str, str], Path], tmp_path: Path
) -> None:
    path = write_script("boots_exits.py", "import sys\n\nsys.exit(3)\n")

    resolution = resolve_script(str(path), base_dir=tmp_path)

    assert resolution.status == ResolutionStatus.UNRESOLVABLE
    assert resolution.reason == "SystemExit: 3"
