"""Shared fixtures: every test starts and ends with the real ``sys.exit``."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from exit_guard.guard import uninstall_guard

CONFIG_DIR = Path(__file__).resolve().parent / "fixtures" / "configs"


@pytest.fixture(autouse=True)
def _restore_sys_exit():
    original = sys.exit
    yield
    uninstall_guard()
    sys.exit = original


@pytest.fixture
def config_dir() -> Path:
    return CONFIG_DIR
