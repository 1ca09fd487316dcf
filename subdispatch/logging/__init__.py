"""Logging utilities."""

from .utils import redact_environment, setup_file_logger

__all__ = ["redact_environment", "setup_file_logger"]
