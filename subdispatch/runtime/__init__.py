"""Runtime helpers (interpreter lookup, environment, process runners)."""

from . import paths
from .environment import EnvironmentSource
from .finder import ExecutableFinder, InterpreterFinder
from .runner import (
    LaunchStrategy,
    ProcessResult,
    ProcessRunner,
    ProcessSpawner,
    SubprocessSpawner,
)

__all__ = [
    "EnvironmentSource",
    "ExecutableFinder",
    "InterpreterFinder",
    "LaunchStrategy",
    "ProcessResult",
    "ProcessRunner",
    "ProcessSpawner",
    "SubprocessSpawner",
    "paths",
]
