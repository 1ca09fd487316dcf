"""Path helpers for locating the console binary and validating binaries."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from subdispatch.constants import COMMAND_NAME

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


class PathSafetyError(ValueError):
    pass


def default_install_root() -> Path:
    """Directory the ``subdispatch`` package is installed into."""

    return PACKAGE_ROOT.parent


def console_binary_path(
    install_root: Optional[str | Path] = None,
    command_name: str = COMMAND_NAME,
) -> str:
    root = Path(install_root) if install_root else default_install_root()
    return str(root / command_name)


def ensure_abs_path(p: str | Path) -> str:
    text = str(p) if p is not None else ""
    if not text:
        raise PathSafetyError("path must not be empty")
    if not Path(text).is_absolute():
        raise PathSafetyError(f"path must be absolute: {text}")
    return text
