import io
import queue
import subprocess
import time
from unittest import mock

import pytest
from watchdog.events import DirModifiedEvent, FileModifiedEvent, FileMovedEvent

from golings import watch


def _write_info(tmp_path, name, hint, pending=True):
    source = tmp_path / f"{name}.go"
    marker = "// I AM NOT DONE\n" if pending else ""
    source.write_text(marker + "package main\n", encoding="utf-8")
    info = tmp_path / "info.toml"
    info.write_text(
        f"[[exercises]]\nname = '{name}'\npath = '{source}'\n"
        f"mode = 'compile'\nhint = '{hint}'\n",
        encoding="utf-8",
    )
    return str(info)


def _fake_run(args, **kwargs):
    if args[0] == "go":
        return subprocess.CompletedProcess(args, 0, stdout="ran fine", stderr="")
    return subprocess.CompletedProcess(args, 0)


def test_handler_forwards_modified_file():
    seen = []
    handler = watch.ChangeHandler(seen.append)
    handler.on_modified(FileModifiedEvent("/work/exercises/a/main.go"))
    assert seen == ["/work/exercises/a/main.go"]


def test_handler_ignores_directory_events():
    seen = []
    handler = watch.ChangeHandler(seen.append)
    handler.on_modified(DirModifiedEvent("/work/exercises/a"))
    assert seen == []


def test_handler_forwards_moved_source_path():
    seen = []
    handler = watch.ChangeHandler(seen.append)
    handler.on_moved(FileMovedEvent("/work/old.go", "/work/new.go"))
    assert seen == ["/work/old.go"]


def test_handler_dispatch_routes_modified_event():
    seen = []
    handler = watch.ChangeHandler(seen.append)
    handler.dispatch(FileModifiedEvent("/work/exercises/b/main.go"))
    assert seen == ["/work/exercises/b/main.go"]


def test_watch_events_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        watch.watch_events(lambda path: None, tmp_path / "absent")


def test_watch_events_reports_file_writes(tmp_path):
    nested = tmp_path / "nested"
    nested.mkdir()
    target = nested / "main.go"
    target.write_text("package main\n", encoding="utf-8")
    events = queue.Queue()
    observer = watch.watch_events(events.put, tmp_path)
    seen = []
    try:
        assert observer.is_alive() is True
        time.sleep(0.2)
        with open(target, "a", encoding="utf-8") as fh:
            fh.write("// edited\n")
        deadline = time.monotonic() + 10
        while time.monotonic() < deadline:
            try:
                seen.append(events.get(timeout=0.5))
            except queue.Empty:
                continue
            if any(path.endswith("main.go") for path in seen):
                break
    finally:
        observer.stop()
        observer.join()
    assert observer.is_alive() is False
    assert any(path.endswith("main.go") for path in seen)


@pytest.mark.parametrize("command", ["quit", "exit"])
def test_handle_command_leaves(command, tmp_path, capsys):
    info = _write_info(tmp_path, "variables1", "look closer")
    assert watch.handle_command(command, info) is False
    assert "Bye by golings o/" in capsys.readouterr().out


def test_handle_command_unknown(tmp_path, capsys):
    info = _write_info(tmp_path, "variables1", "look closer")
    assert watch.handle_command("dance", info) is True
    assert "only list or hint commands are available" in capsys.readouterr().out


def test_handle_command_hint(tmp_path, capsys):
    info = _write_info(tmp_path, "variables1", "look closer")
    with mock.patch("subprocess.run", side_effect=_fake_run):
        assert watch.handle_command("hint", info) is True
    assert "look closer" in capsys.readouterr().out


def test_handle_command_list(tmp_path, capsys):
    info = _write_info(tmp_path, "variables1", "look closer", pending=False)
    with mock.patch("subprocess.run", side_effect=_fake_run):
        assert watch.handle_command("list", info) is True
    out = capsys.readouterr().out
    assert "variables1" in out
    assert "Done" in out


def test_watch_command_runs_then_reads_commands(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises").mkdir()
    info = _write_info(tmp_path, "variables1", "look closer")
    stdin = io.StringIO("hint\nquit\nhint\n")
    with mock.patch("subprocess.run", side_effect=_fake_run):
        watch.watch_command(info, stdin)
    out = capsys.readouterr().out
    assert "ran fine" in out
    assert out.count("look closer") == 1
    assert out.rstrip().endswith("Bye by golings o/")


def test_watch_command_stops_at_end_of_input(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises").mkdir()
    info = _write_info(tmp_path, "variables1", "look closer")
    with mock.patch("subprocess.run", side_effect=_fake_run):
        watch.watch_command(info, io.StringIO("bogus\n"))
    out = capsys.readouterr().out
    assert "only list or hint commands are available" in out
    assert "Bye by golings o/" not in out


def test_watch_command_requires_exercises_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    info = _write_info(tmp_path, "variables1", "look closer")
    with mock.patch("subprocess.run", side_effect=_fake_run):
        with pytest.raises(FileNotFoundError):
            watch.watch_command(info, io.StringIO("quit\n"))