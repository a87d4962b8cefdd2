"""Centralized exit-code contract for the runner and all CLI commands.

Code  Meaning
----  -------
  0   Success: the entry point completed
  1   Failure: configuration unreadable, server failed to start
  2   Error: usage error, missing or invalid input file
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    ERROR = 2
