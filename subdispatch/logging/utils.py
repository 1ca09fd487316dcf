# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Logging helpers (environment redaction, rotating logs)."""

from __future__ import annotations

import logging

from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Mapping

_SECRET_MARKERS = ("PASSWORD", "SECRET", "TOKEN", "API_KEY", "PRIVATE")


def redact_environment(env: Mapping[str, str]) -> Dict[str, str]:
    """Mask values of variables whose names look like credentials."""

    cleaned: Dict[str, str] = {}
    for key, value in env.items():
        upper = key.upper()
        if any(marker in upper for marker in _SECRET_MARKERS):
            cleaned[key] = "<REDACTED>"
        else:
            cleaned[key] = value
    return cleaned


def setup_file_logger(
    log_file: Path, name: str = "subdispatch"
) -> logging.Logger:
    """Configure a rotating file logger (idempotent per file)."""

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    marker = str(log_file)
    if not any(
        isinstance(handler, RotatingFileHandler)
        and getattr(handler, "_subdispatch_log_file", None) == marker
        for handler in logger.handlers
    ):
        handler = RotatingFileHandler(
            log_file, maxBytes=2_000_000, backupCount=3
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        handler._subdispatch_log_file = marker  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
