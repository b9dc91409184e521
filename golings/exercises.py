"""Exercise catalogue: loading the info file, detecting state and running."""

from __future__ import annotations

import enum
import math
import os
import re
import subprocess
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_WS = rb"[\t\n\f\r ]"
_NOT_DONE = re.compile(
    rb"^" + _WS + rb"*///?" + _WS + rb"*I" + _WS + rb"+AM" + _WS + rb"+NOT" + _WS + rb"+DONE",
    re.MULTILINE,
)

_FIELDS = ("name", "path", "mode", "hint")


class ExerciseNotFoundError(LookupError):
    """Raised when no exercise carries the requested name."""

    def __init__(self, message: str = "exercise not found") -> None:
        super().__init__(message)


class NoPendingExercisesError(LookupError):
    """Raised when every exercise is already done."""

    def __init__(self, message: str = "no pending exercises") -> None:
        super().__init__(message)


class State(enum.Enum):
    """Completion state of an exercise."""

    PENDING = 1
    DONE = 2

    def __str__(self) -> str:
        return "Pending" if self is State.PENDING else "Done"


@dataclass(frozen=True)
class Exercise:
    """One exercise as described in the info file."""

    name: str = ""
    path: str = ""
    mode: str = ""
    hint: str = ""

    def state(self) -> State:
        """Pending while the file is unreadable or still has the not-done marker."""
        try:
            with open(self.path, "rb") as fh:
                data = fh.read()
        except OSError:
            return State.PENDING
        return State.PENDING if _NOT_DONE.search(data) else State.DONE

    def build_args(self) -> list[str]:
        """Arguments handed to the go tool for this exercise."""
        if self.mode == "compile":
            args = ["run"]
        else:
            args = ["test", "-v", "-race"]
        args.append(f"./{self.path}")
        return args

    def run(self) -> Result:
        """Compile or test the exercise and capture what the tool printed."""
        try:
            proc = subprocess.run(
                ["go", *self.build_args()],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            return Result(exercise=self, out="", err=str(exc), returncode=None)
        return Result(
            exercise=self, out=proc.stdout, err=proc.stderr, returncode=proc.returncode
        )


@dataclass(frozen=True)
class Result:
    """Outcome of running an exercise."""

    exercise: Exercise
    out: str
    err: str
    returncode: int | None

    def succeeded(self) -> bool:
        """True when the tool started and exited cleanly."""
        return self.returncode == 0


@dataclass(frozen=True)
class Progress:
    """How many exercises are done out of the total."""

    ratio: float
    done: int
    total: int


def _lookup(table: Mapping[str, Any], key: str) -> Any:
    if key in table:
        return table[key]
    for candidate, value in table.items():
        if candidate.lower() == key:
            return value
    return None


def _exercise_from_table(table: Any) -> Exercise:
    if not isinstance(table, Mapping):
        raise ValueError(f"exercise entry must be a table, got {type(table).__name__}")
    values: dict[str, str] = {}
    for field in _FIELDS:
        value = _lookup(table, field)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(
                f"exercise field {field!r} must be a string, got {type(value).__name__}"
            )
        values[field] = value
    return Exercise(**values)


def list_exercises(info_file: str | os.PathLike[str]) -> list[Exercise]:
    """Read every exercise from the TOML info file, in file order."""
    with open(info_file, "rb") as fh:
        data = tomllib.load(fh)
    entries = _lookup(data, "exercises")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ValueError("'exercises' must be an array of tables")
    return [_exercise_from_table(entry) for entry in entries]


def next_pending(info_file: str | os.PathLike[str]) -> Exercise:
    """Return the first exercise that is still pending."""
    for exercise in list_exercises(info_file):
        if exercise.state() is State.PENDING:
            return exercise
    raise NoPendingExercisesError()


def find(name: str, info_file: str | os.PathLike[str]) -> Exercise:
    """Return the exercise with the given name."""
    for exercise in list_exercises(info_file):
        if exercise.name == name:
            return exercise
    raise ExerciseNotFoundError()


def progress(info_file: str | os.PathLike[str]) -> Progress:
    """Count done exercises against the total."""
    exercises = list_exercises(info_file)
    done = sum(1 for exercise in exercises if exercise.state() is State.DONE)
    total = len(exercises)
    ratio = done / total if total else math.nan
    return Progress(ratio=ratio, done=done, total=total)