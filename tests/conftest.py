"""Shared fakes for dispatcher tests."""

from __future__ import annotations

import sys

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pytest

from subdispatch.runtime.environment import EnvironmentSource
from subdispatch.runtime.runner import ProcessResult, ProcessRunner

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@dataclass
class StaticFinder:
    path: Optional[str] = "/usr/bin/php"

    def find(self) -> Optional[str]:
        return self.path


@dataclass
class RecordingSpawner:
    """Records every spawn call and replays a canned result."""

    result: ProcessResult = field(
        default_factory=lambda: ProcessResult(exit_code=0)
    )
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def spawn(
        self,
        command,
        *,
        cwd=None,
        env: Mapping[str, str],
        input=None,
        timeout=None,
    ) -> ProcessResult:
        self.calls.append(
            {
                "command": command,
                "cwd": cwd,
                "env": dict(env),
                "input": input,
                "timeout": timeout,
            }
        )
        return self.result

    @property
    def last(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture()
def finder() -> StaticFinder:
    return StaticFinder()


@pytest.fixture()
def spawner() -> RecordingSpawner:
    return RecordingSpawner()


@pytest.fixture()
def environment() -> EnvironmentSource:
    return EnvironmentSource(
        primary={"PATH": "/usr/bin", "HOME": "/home/app"},
        secondary={},
        lookup={"PATH": "/usr/bin", "HOME": "/home/app"}.get,
    )


@pytest.fixture()
def runner(spawner, environment) -> ProcessRunner:
    return ProcessRunner(spawner=spawner, environment=environment)


@pytest.fixture(autouse=True)
def _no_ini_path(monkeypatch):
    monkeypatch.delenv("PHP_INI_PATH", raising=False)
