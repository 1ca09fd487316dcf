"""Process runner exports."""

from .base import LaunchStrategy, ProcessResult, ProcessSpawner
from .process_runner import ProcessRunner
from .spawner import SubprocessSpawner

__all__ = [
    "LaunchStrategy",
    "ProcessResult",
    "ProcessRunner",
    "ProcessSpawner",
    "SubprocessSpawner",
]
