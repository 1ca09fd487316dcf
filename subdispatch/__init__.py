"""Subdispatch package entry point."""

from .dispatcher import CommandDispatcher
from .exceptions import (
    DispatchError,
    InterpreterNotFoundError,
    SubProcessFailedError,
    WrongContextError,
)
from .runtime.runner import LaunchStrategy, ProcessResult

__all__ = [
    "CommandDispatcher",
    "DispatchError",
    "InterpreterNotFoundError",
    "LaunchStrategy",
    "ProcessResult",
    "SubProcessFailedError",
    "WrongContextError",
]
