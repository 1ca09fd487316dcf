"""Process primitive backed by :mod:`subprocess`."""

from __future__ import annotations

import subprocess

from typing import Mapping, Optional, Sequence, Union

from .base import ProcessInput, ProcessResult, ProcessSpawner


def _has_fileno(stream) -> bool:
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError):
        return False
    return True


def _decode(data: Union[str, bytes, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class SubprocessSpawner(ProcessSpawner):
    """Runs a token vector or a shell string and captures both streams."""

    def spawn(
        self,
        command: Union[str, Sequence[str]],
        *,
        cwd: Optional[str] = None,
        env: Mapping[str, str],
        input: ProcessInput = None,
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        shell = isinstance(command, str)
        args = command if shell else [str(token) for token in command]
        stdin = None
        data: Optional[bytes] = None
        if isinstance(input, str):
            data = input.encode("utf-8")
        elif isinstance(input, bytes):
            data = input
        elif input is not None and _has_fileno(input):
            stdin = input
        elif input is not None:
            content = input.read()
            if isinstance(content, str):
                content = content.encode("utf-8")
            data = content or b""
        else:
            stdin = subprocess.DEVNULL
        proc = subprocess.run(
            args,
            shell=shell,
            cwd=cwd,
            env=dict(env),
            input=data,
            stdin=stdin if data is None else None,
            capture_output=True,
            timeout=timeout or None,
            check=False,
        )
        return ProcessResult(
            exit_code=proc.returncode,
            stdout=_decode(proc.stdout),
            stderr=_decode(proc.stderr),
        )
