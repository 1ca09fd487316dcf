"""Process runner interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import IO, Mapping, Optional, Protocol, Sequence, Union

ProcessInput = Union[str, bytes, IO, None]


class LaunchStrategy(str, Enum):
    """How a command line is handed to the process primitive."""

    SHELL_STRING = "shell_string"
    ARGUMENT_VECTOR = "argument_vector"


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def successful(self) -> bool:
        return self.exit_code == 0


class ProcessSpawner(Protocol):
    def spawn(
        self,
        command: Union[str, Sequence[str]],
        *,
        cwd: Optional[str] = None,
        env: Mapping[str, str],
        input: ProcessInput = None,
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        """Run the command to completion and return its captured streams."""
        ...
