"""Command-line entry point: hint, list, run, verify and watch."""

from __future__ import annotations

import argparse
import os
import platform
import subprocess
import sys
from collections.abc import Sequence

from rich import progress as rich_progress
from rich.console import Console
from rich.text import Text

from golings import ui, watch
from golings.exercises import (
    Exercise,
    ExerciseNotFoundError,
    Result,
    State,
    find,
    list_exercises,
    next_pending,
)

VERSION = "dev"
COMMIT = "none"
DATE = "unknown"
INFO_FILE = "info.toml"

_console = Console(highlight=False, emoji=False, markup=False)

_GOOS = {"win32": "windows", "cygwin": "windows", "darwin": "darwin"}
_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
}

_RUN_DESCRIPTION = """example next pending exercise : golings run next
example specific exercise : golings run variables1"""


class ExercisePendingError(RuntimeError):
    """Raised when an exercise works but still carries the not-done marker."""

    def __init__(self, message: str = "exercise is still pending") -> None:
        super().__init__(message)


def _say(text: str, style: str) -> None:
    end = "" if text.endswith("\n") else "\n"
    _console.print(
        text,
        style=style,
        end=end,
        soft_wrap=True,
        markup=False,
        emoji=False,
        highlight=False,
    )


def _goos() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    return _GOOS.get(sys.platform, sys.platform)


def _goarch() -> str:
    machine = platform.machine().lower()
    return _GOARCH.get(machine, machine or "unknown")


def build_version(version: str, commit: str, date: str) -> str:
    """Compose the multi-line version text shown by ``--version``."""
    result = version
    if commit:
        result = f"{result}\ncommit: {commit}"
    if date:
        result = f"{result}\nbuilt at: {date}"
    return f"{result}\ngoos: {_goos()}\ngoarch: {_goarch()}"


def _select(info_file: str | os.PathLike[str], name: str) -> Exercise:
    if name == "next":
        return next_pending(info_file)
    return find(name, info_file)


def _failure(result: Result) -> subprocess.CalledProcessError:
    returncode = result.returncode if result.returncode is not None else 127
    return subprocess.CalledProcessError(
        returncode,
        ["go", *result.exercise.build_args()],
        output=result.out,
        stderr=result.err,
    )


def _report_failure(result: Result) -> None:
    _say(f"Failed to compile the exercise {result.exercise.path}\n\n", "cyan")
    _say("Check the output below: \n\n", "white")
    _say(result.err, "red")
    _say(result.out, "red")


def hint_command(info_file: str | os.PathLike[str], name: str) -> Exercise:
    """Print the hint of the named exercise, or of the next pending one for 'next'."""
    exercise = _select(info_file, name)
    _say(exercise.hint, "yellow")
    return exercise


def list_command(info_file: str | os.PathLike[str]) -> list[Exercise]:
    """Print the table of all exercises."""
    exercises = list_exercises(info_file)
    ui.print_list(sys.stdout, exercises)
    return exercises


def run_command(info_file: str | os.PathLike[str], name: str) -> Result:
    """Run one exercise ('next' picks the first pending) and report the outcome."""
    try:
        exercise = _select(info_file, name)
    except ExerciseNotFoundError:
        _say(f"No exercise found for '{name}'", "white")
        raise

    with _console.status(Text(f"Running exercise: {exercise.name}")):
        result = exercise.run()
    _say("\nRunning complete!\n\n", "white")

    if not result.succeeded():
        _report_failure(result)
        _say(
            "If you feel stuck, ask a hint by executing "
            f"`golings hint {result.exercise.name}`",
            "yellow",
        )
        raise _failure(result)

    _say(f"✅ Successfully tested {result.exercise.path}!\n\n", "green")
    _say("Congratulations!\n\n", "green")
    _say("Here is the output of your program:\n\n", "green")
    _say(result.out, "cyan")
    if result.exercise.state() is State.PENDING:
        _say("Remove the 'I AM NOT DONE' from the file to keep going\n", "white")
        raise ExercisePendingError()
    return result


def verify_command(info_file: str | os.PathLike[str]) -> list[Result]:
    """Run every exercise in order, stopping at the first one that reports errors."""
    exercises = list_exercises(info_file)
    results: list[Result] = []
    failed: Result | None = None

    columns = (
        rich_progress.TextColumn("{task.description}", markup=False),
        rich_progress.BarColumn(bar_width=50),
        rich_progress.MofNCompleteColumn(),
    )
    with rich_progress.Progress(*columns, console=_console) as bar:
        task = bar.add_task(" Running exercises", total=len(exercises))
        for exercise in exercises:
            bar.update(task, description=f"Running {exercise.name}")
            result = exercise.run()
            bar.advance(task)
            results.append(result)
            if result.err:
                failed = result
                break

    if failed is not None:
        _console.print("\n", end="")
        _report_failure(failed)
        raise _failure(failed)

    _say("Congratulations!!!", "green")
    _say("You passed all the exercises", "green")
    return results


def build_parser(version: str) -> argparse.ArgumentParser:
    """Build the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(
        prog="golings",
        description="Learn go through interactive exercises",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s version {version}"
    )
    commands = parser.add_subparsers(dest="command", metavar="command")

    hint = commands.add_parser("hint", help="Get a hint for an exercise")
    hint.add_argument("name", metavar="exercise_name")

    commands.add_parser("list", help="List all exercises")

    run = commands.add_parser(
        "run",
        help="Run a single exercise",
        description=_RUN_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    run.add_argument("name", metavar="next|exercise_name")

    commands.add_parser("verify", help="Verify all exercises")
    commands.add_parser("watch", help="Verify exercises when files are edited")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, run the chosen command and return the exit status."""
    parser = build_parser(build_version(VERSION, COMMIT, DATE))
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    try:
        match args.command:
            case "hint":
                hint_command(INFO_FILE, args.name)
            case "list":
                list_command(INFO_FILE)
            case "run":
                run_command(INFO_FILE, args.name)
            case "verify":
                verify_command(INFO_FILE)
            case "watch":
                watch.watch_command(INFO_FILE)
    except ExerciseNotFoundError as exc:
        if args.command != "run":
            _say(str(exc), "red")
        return 1
    except (ExercisePendingError, subprocess.CalledProcessError):
        return 1
    except (OSError, ValueError, LookupError) as exc:
        _say(str(exc), "red")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())