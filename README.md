# golings

A terminal companion for working through small Go exercises. Each exercise is
a Go program or test that does not compile or does not pass yet. You fix it,
delete the `// I AM NOT DONE` marker, and move on to the next one. `golings`
keeps track of which exercises are done, runs them with the Go toolchain and
shows you the output, the errors and a hint when you are stuck.

## Requirements

- Python 3.11 or later
- A working `go` toolchain on your `PATH`. Exercises are run with `go run` or
  `go test -v -race`.

## Installation

```
pip install .
```

This installs the `golings` command.

## The exercise file

Run every command from the directory that holds `info.toml`. It lists the
exercises in the order you should do them:

```toml
[[exercises]]
name = "variables1"
path = "exercises/variables/variables1/main.go"
mode = "compile"
hint = "Declare the variable before you use it."

[[exercises]]
name = "if1"
path = "exercises/if/if1"
mode = "test"
hint = "Use an if statement to compare the numbers."
```

Every field is a string. With `mode = "compile"` the exercise is run as
`go run ./<path>`; with any other mode it is run as `go test -v -race ./<path>`.

An exercise is **Pending** while its file still has a line such as
`// I AM NOT DONE` (one or two slashes, any spacing), or while its file cannot
be read. Otherwise it is **Done**.

## Commands

```
golings list                # table of every exercise with its name, path and state
golings run next            # run the first pending exercise
golings run variables1      # run one exercise by name
golings hint next           # show the hint for the first pending exercise
golings hint variables1     # show the hint for one exercise
golings verify              # run every exercise in order
golings watch               # re-run the current exercise each time a file changes
golings --version
```

`golings` with no command prints the help text.

The exit status is 1 when a command fails, 0 otherwise:

- `run` fails when the exercise is not in `info.toml`, when `go` exits with an
  error, and also when the exercise passes but the `I AM NOT DONE` marker is
  still in the file.
- `hint` and `run` fail when the name is unknown, or when given `next` and
  every exercise is done.
- `verify` stops at the first exercise whose run writes anything to standard
  error, and shows that output.
- Any command fails when `info.toml` is missing or malformed.

### Watch mode

`golings watch` clears the screen, shows your progress and runs the next
pending exercise. It then watches the `exercises` directory under the current
directory (which must exist) and runs the next pending exercise again each time
a file in it is written or renamed. While it runs you can type:

- `list`: show the exercise table
- `hint`: show the hint for the next pending exercise
- `quit` or `exit`: leave watch mode

Anything else prints a reminder of the available commands.

## Using it from Python

The catalogue is available as a library in `golings.exercises`:

```python
from golings.exercises import list_exercises, next_pending, find, progress

for exercise in list_exercises("info.toml"):
    print(exercise.name, exercise.state())

report = progress("info.toml")
print(f"{report.done}/{report.total}")

result = find("variables1", "info.toml").run()
print(result.succeeded(), result.out, result.err)
```

`find` raises `ExerciseNotFoundError` and `next_pending` raises
`NoPendingExercisesError` when there is nothing to return.

## What it does not do

`golings` does not ship any exercises or an `info.toml`. You supply the
exercise directory and the file that lists it; the package only reads,
runs and tracks them.