from pathlib import Path

import pytest

from subdispatch.runtime import paths


def test_console_binary_path_uses_install_root(tmp_path: Path):
    assert paths.console_binary_path(tmp_path) == str(tmp_path / "typo3cms")
    assert paths.console_binary_path(tmp_path, "console") == str(
        tmp_path / "console"
    )


def test_default_install_root_contains_package():
    root = paths.default_install_root()
    assert (root / "subdispatch" / "dispatcher.py").exists()
    assert paths.console_binary_path() == str(root / "typo3cms")


def test_ensure_abs_path():
    assert paths.ensure_abs_path("/usr/bin/php") == "/usr/bin/php"
    with pytest.raises(paths.PathSafetyError):
        paths.ensure_abs_path("php")
    with pytest.raises(paths.PathSafetyError):
        paths.ensure_abs_path("")
