"""Integration tests for end-to-end version lifecycles."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from core.config import GvtConfig
from workflow.dispatch import run_command
from workflow.engine import WorkflowEngine


def _engine(tmp_path: Path) -> WorkflowEngine:
    config = replace(
        GvtConfig.from_env(),
        work_dir=tmp_path,
        repository_root=tmp_path / ".gvt",
    )
    return WorkflowEngine(config)


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_add_commit_checkout_scenario(tmp_path: Path) -> None:
    """Checkout 1 should restore version-1 content, not version-2 content."""
    engine = _engine(tmp_path)
    target = tmp_path / "a.txt"
    _write_text(target, "first content")

    run_command(engine, "init")
    run_command(engine, "add", ["a.txt", "-m", "first"])
    _write_text(target, "edited content")
    run_command(engine, "commit", ["a.txt", "-m", "edit"])
    result = run_command(engine, "checkout", ["1"])

    assert result.ok and target.read_text(encoding="utf-8") == "first content"
    assert run_command(engine, "history").message == "2: edit\n1: first\n0: GVT initialized."


def test_checkout_restores_deleted_file(tmp_path: Path) -> None:
    """Snapshots are self-sufficient even after the working file is deleted."""
    engine = _engine(tmp_path)
    target = tmp_path / "nested" / "data.bin"
    target.parent.mkdir()
    target.write_bytes(b"\x00\xffbinary")
    run_command(engine, "init")
    run_command(engine, "add", ["nested/data.bin"])
    target.unlink()
    target.parent.rmdir()

    run_command(engine, "checkout", ["1"])

    assert target.read_bytes() == b"\x00\xffbinary"


def test_detach_then_checkout_across_boundary(tmp_path: Path) -> None:
    """Only the version before detach should restore the detached file."""
    engine = _engine(tmp_path)
    detached = tmp_path / "a.txt"
    kept = tmp_path / "b.txt"
    _write_text(detached, "alpha")
    _write_text(kept, "beta")
    run_command(engine, "init")
    run_command(engine, "add", ["a.txt"])
    run_command(engine, "add", ["b.txt"])
    run_command(engine, "detach", ["a.txt"])
    detached.unlink()

    run_command(engine, "checkout", ["3"])
    restored_after_detach = detached.exists()
    run_command(engine, "checkout", ["2"])

    assert not restored_after_detach and detached.read_text(encoding="utf-8") == "alpha"
    assert kept.read_text(encoding="utf-8") == "beta"


def test_version_counter_counts_only_effective_mutations(tmp_path: Path) -> None:
    """Each effective mutation adds exactly one version; no-ops add none."""
    engine = _engine(tmp_path)
    _write_text(tmp_path / "a.txt", "alpha")
    run_command(engine, "init")

    steps = [
        ("add", ["a.txt"], 1),
        ("add", ["a.txt"], 1),
        ("commit", ["a.txt"], 2),
        ("detach", ["b.txt"], 2),
        ("detach", ["a.txt"], 3),
        ("detach", ["a.txt"], 3),
        ("commit", ["a.txt"], 3),
        ("add", ["a.txt"], 4),
    ]
    observed = []
    for command, args, _ in steps:
        run_command(engine, command, args)
        observed.append(engine.current_version())

    assert observed == [expected for _, _, expected in steps]


def test_history_last_two_of_five(tmp_path: Path) -> None:
    """-last 2 on five versions should display 4 then 3."""
    engine = _engine(tmp_path)
    run_command(engine, "init")
    for index in range(4):
        _write_text(tmp_path / f"f{index}.txt", str(index))
        run_command(engine, "add", [f"f{index}.txt", "-m", f"add {index}"])

    result = run_command(engine, "history", ["-last", "2"])

    assert result.message == "4: add 3\n3: add 2"


def test_invalid_checkout_leaves_state_unchanged(tmp_path: Path) -> None:
    """Checkout of an unknown version should not touch anything."""
    engine = _engine(tmp_path)
    target = tmp_path / "a.txt"
    _write_text(target, "alpha")
    run_command(engine, "init")
    run_command(engine, "add", ["a.txt"])
    _write_text(target, "working edit")

    result = run_command(engine, "checkout", ["99"])

    assert result.exit_code == 60 and target.read_text(encoding="utf-8") == "working edit"
    assert engine.current_version() == 1


@pytest.mark.parametrize("command", ["add", "detach", "commit"])
def test_versions_are_immutable(tmp_path: Path, command: str) -> None:
    """Creating a later version never rewrites an earlier snapshot or record."""
    engine = _engine(tmp_path)
    target = tmp_path / "a.txt"
    _write_text(target, "alpha")
    _write_text(tmp_path / "b.txt", "beta")
    run_command(engine, "init")
    run_command(engine, "add", ["a.txt"])
    before = engine.metadata(1)
    stored = tmp_path / ".gvt" / "versions" / "1" / "a.txt"
    _write_text(target, "changed")

    run_command(engine, command, ["b.txt" if command == "add" else "a.txt"])

    assert engine.metadata(1) == before and stored.read_text(encoding="utf-8") == "alpha"
