"""
Exit Guard
==========
Intercept, log and optionally suppress process termination requests.
"""
from .exit_guard import ExitGuard
from .install import (
    active_guard,
    guarded,
    guarded_exit,
    install_guard,
    real_exit,
    uninstall_guard,
)
from .terminator import RecordingTerminator, SystemTerminator, Terminator

__all__ = [
    "ExitGuard",
    "RecordingTerminator",
    "SystemTerminator",
    "Terminator",
    "active_guard",
    "guarded",
    "guarded_exit",
    "install_guard",
    "real_exit",
    "uninstall_guard",
]
