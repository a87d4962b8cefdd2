"""exit_guard: intercept, log and optionally suppress process exits."""

__all__ = [
    "__version__",
    "ExitGuard",
    "ExitPolicy",
    "TerminationRequest",
    "active_guard",
    "guarded",
    "guarded_exit",
    "install_guard",
    "real_exit",
    "uninstall_guard",
]
__version__ = "0.1.0"

from exit_guard.model import ExitPolicy  # noqa: E402, F401
from exit_guard.model.termination_request import TerminationRequest  # noqa: E402, F401
from exit_guard.guard import (  # noqa: E402, F401
    ExitGuard,
    active_guard,
    guarded,
    guarded_exit,
    install_guard,
    real_exit,
    uninstall_guard,
)
