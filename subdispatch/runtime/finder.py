"""Host interpreter lookup."""

from __future__ import annotations

import os
import shutil

from pathlib import Path
from typing import Optional, Protocol, Sequence

from subdispatch.constants import INTERPRETER_BINARY_ENV, INTERPRETER_NAMES


class InterpreterFinder(Protocol):
    def find(self) -> Optional[str]:
        """Return the interpreter path, or ``None`` when it is missing."""
        ...


class ExecutableFinder(InterpreterFinder):
    """Locates an interpreter via an explicit env var or the search path."""

    def __init__(
        self,
        names: Sequence[str] = INTERPRETER_NAMES,
        *,
        env_var: Optional[str] = INTERPRETER_BINARY_ENV,
        search_path: Optional[str] = None,
    ) -> None:
        self.names = tuple(names)
        self.env_var = env_var
        self.search_path = search_path

    def find(self) -> Optional[str]:
        if self.env_var:
            explicit = os.environ.get(self.env_var)
            if explicit and _is_executable(Path(explicit)):
                return os.path.abspath(explicit)
        for name in self.names:
            found = shutil.which(name, path=self.search_path)
            if found:
                return os.path.abspath(found)
        return None


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


__all__ = ["ExecutableFinder", "InterpreterFinder"]
