import io
import shlex
import sys

import pytest

from subdispatch.runtime.environment import EnvironmentSource
from subdispatch.runtime.runner import (
    LaunchStrategy,
    ProcessRunner,
    SubprocessSpawner,
)


def test_forwarded_environment_merges_snapshots():
    source = EnvironmentSource(
        primary={"A": "1", "B": "2", "C": 3},
        secondary={"B": "override", "D": "4", "E": None},
        lookup={"A": "live-a", "C": "live-c"}.get,
    )
    assert source.forwarded() == {"A": "live-a", "B": "override", "D": "4"}


def test_inherited_environment_reads_parent(monkeypatch):
    monkeypatch.setenv("SUBDISPATCH_PARENT_VAR", "present")
    source = EnvironmentSource(primary={}, lookup=lambda key: None)
    assert source.inherited()["SUBDISPATCH_PARENT_VAR"] == "present"


def test_inherited_environment_uses_injected_parent(monkeypatch):
    monkeypatch.setenv("SUBDISPATCH_PARENT_VAR", "present")
    source = EnvironmentSource(primary={}, parent={"APP_CONTEXT": "Testing"})
    assert source.inherited() == {"APP_CONTEXT": "Testing"}


def test_argument_vector_strategy_uses_injected_parent(spawner):
    environment = EnvironmentSource(
        primary={},
        parent={"PATH": "/usr/bin", "APP_CONTEXT": "Production"},
    )
    runner = ProcessRunner(spawner=spawner, environment=environment)
    runner.run(
        "/usr/bin/php", ["/app/typo3cms"], {"APP_CONTEXT": "Testing"}
    )
    assert spawner.last["env"] == {
        "PATH": "/usr/bin",
        "APP_CONTEXT": "Testing",
    }


def test_shell_string_strategy_escapes_tokens(spawner, environment):
    runner = ProcessRunner(
        spawner=spawner, environment=environment, escaper=lambda t: f"<{t}>"
    )
    runner.run(
        "/usr/bin/php",
        ["/app/typo3cms", "cache:flush", "a b"],
        {"X": "1"},
        strategy=LaunchStrategy.SHELL_STRING,
    )
    assert spawner.last["command"] == (
        "</usr/bin/php> </app/typo3cms> <cache:flush> <a b>"
    )


def test_shell_string_strategy_uses_forwarded_env(spawner):
    environment = EnvironmentSource(
        primary={"PATH": "/usr/bin", "APP_CONTEXT": "Production"},
        secondary={"FROM_DOTENV": "yes"},
        lookup={"PATH": "/usr/bin", "APP_CONTEXT": "Production"}.get,
    )
    runner = ProcessRunner(spawner=spawner, environment=environment)
    runner.run(
        "/usr/bin/php",
        ["/app/typo3cms", "list"],
        {"APP_CONTEXT": "Testing"},
        strategy=LaunchStrategy.SHELL_STRING,
    )
    assert spawner.last["env"] == {
        "PATH": "/usr/bin",
        "APP_CONTEXT": "Testing",
        "FROM_DOTENV": "yes",
    }


def test_argument_vector_strategy_inherits_parent_env(
    monkeypatch, spawner, environment
):
    monkeypatch.setenv("APP_CONTEXT", "Production")
    monkeypatch.setenv("SUBDISPATCH_PARENT_VAR", "present")
    runner = ProcessRunner(spawner=spawner, environment=environment)
    runner.run(
        "/usr/bin/php",
        ["/app/typo3cms", "list"],
        {"APP_CONTEXT": "Testing"},
    )
    assert spawner.last["command"] == [
        "/usr/bin/php",
        "/app/typo3cms",
        "list",
    ]
    env = spawner.last["env"]
    assert env["APP_CONTEXT"] == "Testing"
    assert env["SUBDISPATCH_PARENT_VAR"] == "present"


def test_subprocess_spawner_runs_argument_vector():
    result = SubprocessSpawner().spawn(
        [
            sys.executable,
            "-c",
            "import os, sys; "
            "print(sys.stdin.read().upper() + os.environ['GREETING'])",
        ],
        env={"GREETING": "!"},
        input="hello ",
    )
    assert result.successful
    assert result.stdout.strip() == "HELLO !"


def test_subprocess_spawner_runs_shell_string():
    command = (
        f"{shlex.quote(sys.executable)} -c "
        "'import sys; sys.stderr.write(\"boom\"); sys.exit(4)'"
    )
    result = SubprocessSpawner().spawn(command, env={})
    assert result.exit_code == 4
    assert not result.successful
    assert result.stderr == "boom"


@pytest.mark.parametrize(
    "stream",
    [io.StringIO("from a stream"), io.BytesIO(b"from a stream")],
    ids=["text", "binary"],
)
def test_subprocess_spawner_reads_in_memory_streams(stream):
    result = SubprocessSpawner().spawn(
        [sys.executable, "-c", "import sys; print(sys.stdin.read())"],
        env={},
        input=stream,
    )
    assert result.successful
    assert result.stdout.strip() == "from a stream"


def test_subprocess_spawner_passes_real_file_as_stdin(tmp_path):
    source = tmp_path / "answers.txt"
    source.write_text("yes\n")
    with source.open("rb") as handle:
        result = SubprocessSpawner().spawn(
            [sys.executable, "-c", "import sys; print(sys.stdin.read())"],
            env={},
            input=handle,
        )
    assert result.stdout.strip() == "yes"
