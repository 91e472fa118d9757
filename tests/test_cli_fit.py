from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


def _write(p: Path, size: int = 1) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"x" * max(0, size))


def _workspace(tmp_path: Path) -> Path:
    ws = tmp_path / "ws"
    for name, size in {"a.dat": 60, "b.dat": 40, "c.dat": 30, "d.dat": 20, "e.dat": 10}.items():
        _write(ws / name, size)
    _write(ws / "sub" / "f.dat", 50)
    return ws


def test_count_only(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    res = runner.invoke(app, ["-s", "100b", "-n", str(ws)])
    assert res.exit_code == 0
    assert res.stdout.strip() == "2 disks."


def test_count_single_disk(tmp_path: Path) -> None:
    _write(tmp_path / "ws" / "a.dat", 5)
    res = runner.invoke(app, ["-s", "1k", "-n", str(tmp_path / "ws")])
    assert res.exit_code == 0
    assert res.stdout.strip() == "1 disk."


def test_combined_short_flags_recurse(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    res = runner.invoke(app, ["-nr", "-s", "100", str(ws)])
    assert res.exit_code == 0
    # 210 bytes total: {60,40}, {50,30,20}, {10}
    assert res.stdout.strip() == "3 disks."


def test_manifest_output(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    res = runner.invoke(app, ["--size", "100", str(ws)])
    assert res.exit_code == 0
    lines = res.stdout.splitlines()
    assert "Disk #1, 0% (0B) free:" in lines
    assert "Disk #2, 40% (40B) free:" in lines
    assert f"       60B {ws / 'a.dat'}" in lines
    assert f"       10B {ws / 'e.dat'}" in lines
    # Non-recursive: sub/ is skipped
    assert "f.dat" not in res.stdout


def test_manifest_keeps_brackets_in_names(tmp_path: Path) -> None:
    _write(tmp_path / "ws" / "[draft] notes.txt", 3)
    res = runner.invoke(app, ["-s", "10", str(tmp_path / "ws")])
    assert res.exit_code == 0
    assert "[draft] notes.txt" in res.stdout


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX hard links")
def test_link_mode_creates_disk_directories(tmp_path: Path, monkeypatch) -> None:
    ws = _workspace(tmp_path)
    monkeypatch.chdir(tmp_path)
    res = runner.invoke(app, ["-s", "100", "-l", "out", "ws"])
    assert res.exit_code == 0
    assert (tmp_path / "out" / "0001" / "ws" / "a.dat").exists()
    assert (tmp_path / "out" / "0002" / "ws" / "e.dat").exists()
    assert os.stat(ws / "a.dat").st_ino == os.stat(tmp_path / "out" / "0001" / "ws" / "a.dat").st_ino
    assert "ws/a.dat -> out/0001" in res.stdout.splitlines()


def test_preset_and_plan_export(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    out = tmp_path / "plans" / "plan.json"
    res = runner.invoke(app, ["-s", "cd700", "-n", "--out", str(out), str(ws)])
    assert res.exit_code == 0
    data = json.loads(out.read_text())
    assert data["capacity"] == 700_000_000
    assert len(data["disks"]) == 1
    assert len(data["id"]) == 64


def test_size_from_config(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    cfg = tmp_path / "fit.yaml"
    cfg.write_text("size: 100\nrecursive: true\n", encoding="utf-8")
    res = runner.invoke(app, ["--config", str(cfg), "-n", str(ws)])
    assert res.exit_code == 0
    assert res.stdout.strip() == "3 disks."


def test_missing_size_is_usage_error(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    res = runner.invoke(app, [str(ws)])
    assert res.exit_code == 2


def test_missing_path_is_usage_error() -> None:
    res = runner.invoke(app, ["-s", "10k"])
    assert res.exit_code == 2


@pytest.mark.parametrize(
    "size,message",
    [
        ("abc", "fit: invalid input."),
        ("10q", "fit: unknown unit: 'q'"),
        ("0", "fit: disk size is too small."),
        ("-3k", "fit: disk size is too small."),
    ],
)
def test_bad_sizes_fail(tmp_path: Path, size: str, message: str) -> None:
    ws = _workspace(tmp_path)
    res = runner.invoke(app, [f"--size={size}", str(ws)])
    assert res.exit_code == 1
    assert message in res.output


def test_oversized_file_fails(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    res = runner.invoke(app, ["-s", "50", str(ws)])
    assert res.exit_code == 1
    assert f"fit: can never fit '{ws / 'a.dat'}' (60B)." in res.output


def test_no_files_found(tmp_path: Path) -> None:
    (tmp_path / "empty" / "sub").mkdir(parents=True)
    res = runner.invoke(app, ["-s", "10k", str(tmp_path / "empty")])
    assert res.exit_code == 1
    assert "fit: no files found." in res.output


def test_unreadable_path(tmp_path: Path) -> None:
    res = runner.invoke(app, ["-s", "10k", str(tmp_path / "missing")])
    assert res.exit_code == 1
    assert "can't open directory" in res.output


def test_too_many_disks_from_config_ceiling(tmp_path: Path) -> None:
    ws = _workspace(tmp_path)
    cfg = tmp_path / "fit.json"
    cfg.write_text(json.dumps({"max_disks": 1}), encoding="utf-8")
    res = runner.invoke(app, ["--config", str(cfg), "-s", "100", "-n", str(ws)])
    assert res.exit_code == 1
    assert "fit: fitting takes too many disks. (> 1)" in res.output


@pytest.mark.skipif(sys.platform == "win32", reason="tab in file name")
def test_tab_in_name_printed_verbatim(tmp_path: Path, monkeypatch) -> None:
    ws = tmp_path / "ws"
    tabbed = ws / "a\tb.dat"
    _write(tabbed, 3)
    res = runner.invoke(app, ["-s", "10", str(ws)])
    assert res.exit_code == 0
    assert f"        3B {tabbed}" in res.stdout.splitlines()

    monkeypatch.chdir(tmp_path)
    res = runner.invoke(app, ["-s", "10", "-l", "out", "ws"])
    assert res.exit_code == 0
    assert "ws/a\tb.dat -> out/0001" in res.stdout.splitlines()
    assert (tmp_path / "out" / "0001" / "ws" / "a\tb.dat").exists()
