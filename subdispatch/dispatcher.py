"""Execute console commands in a sub process.

This is mostly useful during initial setup, or when a command runs with a
minimal bootstrap but needs to perform some actions with a full bootstrap
(e.g. flushing caches). A :class:`CommandDispatcher` is created once through
one of its factory methods and can then run any number of commands.
"""

from __future__ import annotations

import logging
import os
import sys

from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple

from subdispatch.arguments import (
    Arguments,
    build_command_line,
    normalize_output,
)
from subdispatch.configuration import DispatcherSettings
from subdispatch.constants import (
    ENV_FLAG_VALUE,
    ERROR_INTERPRETER_NOT_FOUND,
    ERROR_WRONG_COMMAND_CONTEXT,
    ERROR_WRONG_TEST_CONTEXT,
    INI_PATH_FLAG,
    PLUGIN_RUN_ENV,
    SUB_PROCESS_ENV,
)
from subdispatch.exceptions import (
    InterpreterNotFoundError,
    SubProcessFailedError,
    WrongContextError,
)
from subdispatch.runtime.finder import ExecutableFinder, InterpreterFinder
from subdispatch.runtime.paths import (
    PathSafetyError,
    console_binary_path,
    ensure_abs_path,
)
from subdispatch.runtime.runner import LaunchStrategy, ProcessRunner
from subdispatch.runtime.runner.base import ProcessInput

logger = logging.getLogger(__name__)

_CONSTRUCTION_KEY = object()


class CommandDispatcher:
    """Immutable command line prefix and environment for sub-process runs."""

    __slots__ = (
        "_interpreter_path",
        "_command_line",
        "_environment",
        "_launch_strategy",
        "_runner",
    )

    def __init__(
        self,
        key: object,
        interpreter_path: str,
        command_line: Sequence[str],
        environment: Mapping[str, str],
        *,
        launch_strategy: LaunchStrategy,
        runner: ProcessRunner,
    ) -> None:
        if key is not _CONSTRUCTION_KEY:
            raise TypeError(
                "CommandDispatcher must be created with one of its "
                "factory methods"
            )
        try:
            interpreter_path = ensure_abs_path(interpreter_path)
        except PathSafetyError as exc:
            raise InterpreterNotFoundError(
                f"Invalid interpreter path: {exc}",
                ERROR_INTERPRETER_NOT_FOUND,
            ) from exc
        object.__setattr__(self, "_interpreter_path", interpreter_path)
        object.__setattr__(self, "_command_line", tuple(command_line))
        object.__setattr__(
            self, "_environment", MappingProxyType(dict(environment))
        )
        object.__setattr__(self, "_launch_strategy", launch_strategy)
        object.__setattr__(self, "_runner", runner)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("CommandDispatcher is immutable")

    def __repr__(self) -> str:
        return (
            f"CommandDispatcher(interpreter_path={self._interpreter_path!r}, "
            f"base_command_line={list(self._command_line)!r}, "
            f"launch_strategy={self._launch_strategy.value!r})"
        )

    @property
    def interpreter_path(self) -> str:
        return self._interpreter_path

    @property
    def base_command_line(self) -> Tuple[str, ...]:
        return self._command_line

    @property
    def base_environment(self) -> Mapping[str, str]:
        return self._environment

    @property
    def launch_strategy(self) -> LaunchStrategy:
        return self._launch_strategy

    @property
    def runner(self) -> ProcessRunner:
        return self._runner

    @classmethod
    def create_from_plugin_run(
        cls,
        command_line: Sequence[str] = (),
        env: Optional[Mapping[str, Any]] = None,
        *,
        interpreter_finder: Optional[InterpreterFinder] = None,
        runner: Optional[ProcessRunner] = None,
        install_root: Optional[str] = None,
        settings: Optional[DispatcherSettings] = None,
    ) -> "CommandDispatcher":
        """Create the dispatcher from within a package manager plugin hook.

        The console binary is expected next to the installed package and
        commands are handed to the process primitive as one shell string.
        """

        settings = settings or DispatcherSettings()
        command_path = console_binary_path(
            install_root or settings.install_root, settings.command_name
        )
        env = dict(env or {})
        env[PLUGIN_RUN_ENV] = ENV_FLAG_VALUE
        return cls.create(
            command_path,
            command_line,
            env,
            interpreter_finder=interpreter_finder,
            runner=runner,
            launch_strategy=LaunchStrategy.SHELL_STRING,
            settings=settings,
        )

    @classmethod
    def create_from_command_run(
        cls,
        command_line: Sequence[str] = (),
        env: Optional[Mapping[str, Any]] = None,
        *,
        interpreter_finder: Optional[InterpreterFinder] = None,
        runner: Optional[ProcessRunner] = None,
        argv: Optional[Sequence[str]] = None,
        settings: Optional[DispatcherSettings] = None,
    ) -> "CommandDispatcher":
        """Create the dispatcher while another console command is running.

        The console binary is taken from the running process' ``argv[0]``.
        """

        settings = settings or DispatcherSettings()
        argv = sys.argv if argv is None else argv
        invoked = argv[0] if argv else ""
        if not invoked or settings.command_name not in invoked:
            raise WrongContextError(
                f"Tried to create {settings.command_name} command runner "
                "from wrong context",
                ERROR_WRONG_COMMAND_CONTEXT,
            )
        return cls.create(
            invoked,
            command_line,
            env,
            interpreter_finder=interpreter_finder,
            runner=runner,
            settings=settings,
        )

    @classmethod
    def create_from_test_run(
        cls,
        command_path: Optional[str] = None,
        *,
        argv: Optional[Sequence[str]] = None,
        interpreter_finder: Optional[InterpreterFinder] = None,
        runner: Optional[ProcessRunner] = None,
        install_root: Optional[str] = None,
        settings: Optional[DispatcherSettings] = None,
    ) -> "CommandDispatcher":
        """Create the dispatcher during a test run."""

        settings = settings or DispatcherSettings()
        argv = sys.argv if argv is None else argv
        invoked = argv[0] if argv else ""
        if not invoked or not any(
            name in invoked for name in settings.test_runners
        ):
            raise WrongContextError(
                f"Tried to create {settings.command_name} command runner "
                "from wrong context",
                ERROR_WRONG_TEST_CONTEXT,
            )
        command_path = command_path or console_binary_path(
            install_root or settings.install_root, settings.command_name
        )
        return cls.create(
            command_path,
            interpreter_finder=interpreter_finder,
            runner=runner,
            settings=settings,
        )

    @classmethod
    def create(
        cls,
        executable_path: str,
        command_line: Sequence[str] = (),
        env: Optional[Mapping[str, Any]] = None,
        *,
        interpreter_finder: Optional[InterpreterFinder] = None,
        runner: Optional[ProcessRunner] = None,
        launch_strategy: LaunchStrategy = LaunchStrategy.ARGUMENT_VECTOR,
        settings: Optional[DispatcherSettings] = None,
    ) -> "CommandDispatcher":
        """Create a dispatcher for the console binary at ``executable_path``.

        Raises :class:`InterpreterNotFoundError` when the finder cannot
        locate the host interpreter.
        """

        settings = settings or DispatcherSettings()
        finder = interpreter_finder or ExecutableFinder(settings.interpreter)
        interpreter = finder.find()
        if not interpreter:
            raise InterpreterNotFoundError(
                f'The "{settings.interpreter[0]}" binary could not be found.',
                ERROR_INTERPRETER_NOT_FOUND,
            )
        base_command_line = [str(executable_path), *command_line]
        ini_path = os.environ.get(settings.ini_path_env)
        if ini_path:
            base_command_line.extend([INI_PATH_FLAG, ini_path])
        environment = dict(settings.env)
        environment.update(
            {str(k): str(v) for k, v in (env or {}).items()}
        )
        environment[SUB_PROCESS_ENV] = ENV_FLAG_VALUE
        logger.debug(
            "Created dispatcher for %s using %s", executable_path, interpreter
        )
        return cls(
            _CONSTRUCTION_KEY,
            interpreter,
            base_command_line,
            environment,
            launch_strategy=launch_strategy,
            runner=runner or ProcessRunner(),
        )

    def execute_command(
        self,
        command: str,
        arguments: Arguments = None,
        env: Optional[Mapping[str, Any]] = None,
        input: ProcessInput = None,
    ) -> str:
        """Execute ``command`` in a sub process and return its output.

        Argument names are converted to their dashed flag version unless
        already given like that; integer keys are positional arguments.
        """

        merged_env = dict(self._environment)
        merged_env.update({str(k): str(v) for k, v in (env or {}).items()})
        merged_env[SUB_PROCESS_ENV] = ENV_FLAG_VALUE
        command_line = build_command_line(
            self._command_line, command, arguments
        )
        result = self._runner.run(
            self._interpreter_path,
            command_line,
            merged_env,
            input,
            self._launch_strategy,
        )
        output = normalize_output(result.stdout)
        if not result.successful:
            logger.warning(
                "Sub process command %s failed with exit code %s",
                command,
                result.exit_code,
            )
            raise SubProcessFailedError.for_process(
                command, command_line, result
            )
        return output


__all__ = ["CommandDispatcher"]
