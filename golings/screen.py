"""Full-screen views shown by the interactive watch mode."""

from __future__ import annotations

import os
import subprocess
import sys

from rich.console import Console

from golings import ui
from golings.exercises import State, list_exercises, next_pending, progress

_console = Console(highlight=False, emoji=False, markup=False)

_LOOKUP_ERRORS = (OSError, ValueError, LookupError)


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


def clear_screen() -> None:
    """Clear the terminal, reporting when the clear command fails."""
    if sys.platform == "win32":
        command = ["cmd", "/c", "cls"]
    else:
        command = ["clear"]
    try:
        completed = subprocess.run(command, check=False)
    except OSError:
        _say("Clear terminal command error", "red")
        return
    if completed.returncode != 0:
        _say("Clear terminal command error", "red")


def print_hint(info_file: str | os.PathLike[str]) -> None:
    """Clear the screen and show the hint of the next pending exercise."""
    clear_screen()
    try:
        exercise = next_pending(info_file)
    except _LOOKUP_ERRORS:
        _say("Failed to find next exercises", "red")
        return
    _say(exercise.hint, "yellow")


def print_list(info_file: str | os.PathLike[str]) -> None:
    """Clear the screen and show the table of all exercises."""
    clear_screen()
    try:
        exercises = list_exercises(info_file)
    except (OSError, ValueError):
        _say("Failed to list exercises", "red")
        return
    ui.print_list(sys.stdout, exercises)


def run_next_exercise(info_file: str | os.PathLike[str]) -> None:
    """Clear the screen, report progress and run the next pending exercise."""
    clear_screen()

    try:
        report = progress(info_file)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
    else:
        _say(
            f"Progress: {report.done}/{report.total} ({report.ratio * 100:.2f}%)\n\n",
            "blue",
        )

    try:
        exercise = next_pending(info_file)
    except _LOOKUP_ERRORS:
        _say("Failed to find next exercises", "red")
        return

    result = exercise.run()
    if not result.succeeded():
        _say(f"Failed to compile the exercise {result.exercise.path}\n\n", "cyan")
        _say("Check the output below: \n\n", "white")
        _say(result.err, "red")
        _say(result.out, "red")
        _say(
            "If you feel stuck, ask a hint by executing "
            f"`golings hint {result.exercise.name}`",
            "yellow",
        )
        return

    _say("Congratulations!\n\n", "green")
    _say("Here is the output of your program:\n\n", "green")
    _say(result.out, "cyan")
    if result.exercise.state() is State.PENDING:
        _say("Remove the 'I AM NOT DONE' from the file to keep going\n", "white")
        _say("exercise is still pending", "red")