"""Shared utilities for exit_guard."""

from exit_guard.utils.exit_codes import ExitCode

__all__ = ["ExitCode"]
