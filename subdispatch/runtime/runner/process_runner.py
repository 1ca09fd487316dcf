"""Runner that launches an assembled command line with a composed env."""

from __future__ import annotations

import logging
import shlex

from typing import Callable, Dict, Mapping, Optional, Sequence

from subdispatch.logging.utils import redact_environment
from subdispatch.runtime.environment import EnvironmentSource

from .base import LaunchStrategy, ProcessInput, ProcessResult, ProcessSpawner
from .spawner import SubprocessSpawner

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Executes a command line synchronously using one launch strategy."""

    def __init__(
        self,
        spawner: Optional[ProcessSpawner] = None,
        environment: Optional[EnvironmentSource] = None,
        escaper: Callable[[str], str] = shlex.quote,
    ) -> None:
        self.spawner = spawner or SubprocessSpawner()
        self.environment = environment or EnvironmentSource()
        self.escaper = escaper

    def shell_command(
        self, interpreter: str, command_line: Sequence[str]
    ) -> str:
        tokens = [interpreter, *command_line]
        return " ".join(self.escaper(str(token)) for token in tokens)

    def child_environment(
        self, env: Mapping[str, str], strategy: LaunchStrategy
    ) -> Dict[str, str]:
        if strategy is LaunchStrategy.SHELL_STRING:
            child_env = self.environment.forwarded()
        else:
            child_env = self.environment.inherited()
        child_env.update(env)
        return child_env

    def run(
        self,
        interpreter: str,
        command_line: Sequence[str],
        env: Mapping[str, str],
        input: ProcessInput = None,
        strategy: LaunchStrategy = LaunchStrategy.ARGUMENT_VECTOR,
    ) -> ProcessResult:
        child_env = self.child_environment(env, strategy)
        if strategy is LaunchStrategy.SHELL_STRING:
            command: str | list[str] = self.shell_command(
                interpreter, command_line
            )
        else:
            command = [interpreter, *command_line]
        logger.debug(
            "Launching %s (%s) with env overrides %s",
            command,
            strategy.value,
            redact_environment(env),
        )
        result = self.spawner.spawn(
            command, cwd=None, env=child_env, input=input, timeout=None
        )
        logger.debug("Process exited with code %s", result.exit_code)
        return result
