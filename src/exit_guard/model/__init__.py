"""Enums shared across the guard, runner and HTTP layers."""

from __future__ import annotations

from enum import Enum


class ExitPolicy(str, Enum):
    """What the guard does with a termination request."""

    FORWARD = "forward"
    INTERCEPT = "intercept"
