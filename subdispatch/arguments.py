"""Translate command arguments into command-line tokens."""

from __future__ import annotations

import re

from typing import Any, List, Mapping, Optional, Sequence, Union

Arguments = Union[Mapping[Any, Any], Sequence[Any], None]

_WORD = re.compile(r"([A-Z][a-z0-9]+)")
_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def dashed_argument_name(name: str) -> str:
    """Turn a camelCase argument name into a ``--dashed-flag``.

    Names that already start with ``--`` are returned unchanged.
    Casing is ASCII only so the result never depends on the locale.
    """

    if name.startswith("--"):
        return name
    dashed = name[:1].translate(_ASCII_UPPER) + name[1:]
    dashed = _WORD.sub(r"\1-", dashed)
    return "--" + dashed[:-1].translate(_ASCII_LOWER)


def _token(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    return value if isinstance(value, str) else str(value)


def _argument_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_token(item) for item in value)
    return _token(value)


def build_command_line(
    base: Sequence[str], command: str, arguments: Arguments = None
) -> List[str]:
    """Return a fresh command line for ``command`` and its arguments."""

    command_line = list(base)
    command_line.append(command)
    if arguments is None:
        return command_line
    if not isinstance(arguments, Mapping):
        arguments = dict(enumerate(arguments))
    for name, value in arguments.items():
        if isinstance(name, int) and not isinstance(name, bool):
            command_line.append(_token(value))
        else:
            command_line.append(dashed_argument_name(str(name)))
            command_line.append(_argument_value(value))
    return command_line


def normalize_output(output: Optional[str]) -> str:
    if not output:
        return ""
    return output.strip().replace("\r\n", "\n")


__all__ = [
    "Arguments",
    "build_command_line",
    "dashed_argument_name",
    "normalize_output",
]
