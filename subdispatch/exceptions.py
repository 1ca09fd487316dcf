"""Custom exceptions for sub-process command dispatching."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from subdispatch.runtime.runner.base import ProcessResult


class DispatchError(RuntimeError):
    """Base exception for dispatcher failures."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code


class WrongContextError(DispatchError):
    """Raised when a dispatcher factory runs outside its expected context."""


class InterpreterNotFoundError(DispatchError):
    """Raised when no host interpreter binary can be located."""


class SubProcessFailedError(DispatchError):
    """Raised when a dispatched command exits with a failure status."""

    def __init__(
        self,
        command: str,
        command_line: Sequence[str],
        exit_code: int,
        output: str = "",
        error_output: str = "",
    ) -> None:
        self.command = command
        self.command_line = tuple(command_line)
        self.exit_code = exit_code
        self.output = output
        self.error_output = error_output
        message = (
            f'Executing command "{command}" failed '
            f'(exit code: "{exit_code}")'
        )
        details = error_output.strip() or output.strip()
        if details:
            message += f"\n\n{details}"
        super().__init__(message)

    @classmethod
    def for_process(
        cls,
        command: str,
        command_line: Sequence[str],
        result: "ProcessResult",
    ) -> "SubProcessFailedError":
        return cls(
            command,
            command_line,
            result.exit_code,
            output=result.stdout,
            error_output=result.stderr,
        )


__all__ = [
    "DispatchError",
    "InterpreterNotFoundError",
    "SubProcessFailedError",
    "WrongContextError",
]
