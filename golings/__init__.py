"""Track, run and give hints for Go exercises listed in an info.toml file."""

__version__ = "0.1.0"