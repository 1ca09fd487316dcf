"""Environment snapshots used to compose a child process environment."""

from __future__ import annotations

import os

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional


def _live_lookup(key: str) -> Optional[str]:
    return os.environ.get(key)


@dataclass
class EnvironmentSource:
    """Key/value snapshots plus a live lookup for forwarded variables.

    ``primary`` is the environment the parent process declared at start-up,
    ``secondary`` an additional snapshot (e.g. variables loaded from a
    ``.env`` file) whose string entries take precedence. ``parent`` is the
    environment inherited by argument-vector launches; when unset the live
    process environment is used.
    """

    primary: Mapping[str, Any] = field(
        default_factory=lambda: dict(os.environ)
    )
    secondary: Mapping[str, Any] = field(default_factory=dict)
    lookup: Callable[[str], Optional[str]] = _live_lookup
    parent: Optional[Mapping[str, str]] = None

    def forwarded(self) -> Dict[str, str]:
        """Return the variables forwarded to a shell-string child process."""

        env: Dict[str, str] = {}
        for key, value in self.primary.items():
            if not isinstance(value, str):
                continue
            live = self.lookup(key)
            if live is not None:
                env[key] = live
        for key, value in self.secondary.items():
            if isinstance(value, str):
                env[key] = value
        return env

    def inherited(self) -> Dict[str, str]:
        """Return the full parent environment."""

        if self.parent is not None:
            return dict(self.parent)
        return dict(os.environ)


__all__ = ["EnvironmentSource"]
