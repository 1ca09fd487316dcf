"""Typed helpers for parsing dispatcher configuration dictionaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import yaml

from subdispatch.constants import (
    COMMAND_NAME,
    INI_PATH_ENV,
    INTERPRETER_NAMES,
    TEST_RUNNER_NAMES,
)


def _ensure_path(
    value: Optional[str | Path], *, config_root: Path
) -> Optional[Path]:
    if value is None:
        return None
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _coerce_names(
    value: Optional[str | Iterable[str]], default: Tuple[str, ...]
) -> Tuple[str, ...]:
    if not value:
        return default
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class DispatcherSettings:
    command_name: str = COMMAND_NAME
    interpreter: Tuple[str, ...] = INTERPRETER_NAMES
    install_root: Optional[Path] = None
    test_runners: Tuple[str, ...] = TEST_RUNNER_NAMES
    ini_path_env: str = INI_PATH_ENV
    env: Dict[str, str] = field(default_factory=dict)


def build_dispatcher_settings(
    config: Dict[str, Any], *, config_root: Optional[Path] = None
) -> DispatcherSettings:
    root = config_root or Path.cwd()
    data = config.get("dispatcher") or {}
    env = {str(k): str(v) for k, v in (data.get("env") or {}).items()}
    return DispatcherSettings(
        command_name=str(data.get("command_name") or COMMAND_NAME),
        interpreter=_coerce_names(
            data.get("interpreter"), INTERPRETER_NAMES
        ),
        install_root=_ensure_path(
            data.get("install_root"), config_root=root
        ),
        test_runners=_coerce_names(
            data.get("test_runners"), TEST_RUNNER_NAMES
        ),
        ini_path_env=str(data.get("ini_path_env") or INI_PATH_ENV),
        env=env,
    )


def load_settings(config_path: Path) -> DispatcherSettings:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_path}' not found.")
    data = yaml.safe_load(config_path.read_text()) or {}
    return build_dispatcher_settings(
        data, config_root=config_path.resolve().parent
    )


__all__ = [
    "DispatcherSettings",
    "build_dispatcher_settings",
    "load_settings",
]
