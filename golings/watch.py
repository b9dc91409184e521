"""Interactive watch mode: rerun the next exercise whenever files change."""

from __future__ import annotations

import errno
import os
import sys
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from rich.console import Console
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from golings import screen

_console = Console(highlight=False, emoji=False, markup=False)

_FAREWELL = "Bye by golings o/"


def _say(text: str, style: str) -> None:
    _console.print(
        text, style=style, soft_wrap=True, markup=False, emoji=False, highlight=False
    )


class ChangeHandler(FileSystemEventHandler):
    """Forwards the path of every written or renamed file to a callback."""

    def __init__(self, notify: Callable[[str], None]) -> None:
        super().__init__()
        self._notify = notify

    def _forward(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._notify(os.fsdecode(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        self._forward(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._forward(event)


def watch_events(
    notify: Callable[[str], None],
    directory: str | os.PathLike[str] | None = None,
) -> Observer:
    """Watch a directory tree (default ./exercises) and return the running observer."""
    root = Path(directory) if directory is not None else Path.cwd() / "exercises"
    if not root.is_dir():
        raise FileNotFoundError(errno.ENOENT, "exercises directory not found", str(root))
    observer = Observer()
    observer.daemon = True
    observer.schedule(ChangeHandler(notify), str(root), recursive=True)
    observer.start()
    return observer


def handle_command(command: str, info_file: str | os.PathLike[str]) -> bool:
    """Act on one line typed in watch mode; return False when the user leaves."""
    match command:
        case "list":
            screen.print_list(info_file)
        case "hint":
            screen.print_hint(info_file)
        case "quit" | "exit":
            _say(_FAREWELL, "green")
            return False
        case _:
            _say("only list or hint commands are available", "yellow")
    return True


def watch_command(
    info_file: str | os.PathLike[str], stdin: TextIO | None = None
) -> None:
    """Run the next exercise, then rerun it on file changes until the user quits."""
    source = sys.stdin if stdin is None else stdin
    lock = threading.Lock()

    def refresh(_path: str) -> None:
        with lock:
            screen.run_next_exercise(info_file)

    with lock:
        screen.run_next_exercise(info_file)

    observer = watch_events(refresh)
    try:
        for line in source:
            command = line.removesuffix("\n")
            with lock:
                if not handle_command(command, info_file):
                    break
    finally:
        observer.stop()
        observer.join()