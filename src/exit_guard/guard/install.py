"""Process-wide installation of an ExitGuard over ``sys.exit``.

Usage::

    from exit_guard.guard import install_guard, real_exit

    guard = install_guard("intercept")
    sys.exit(7)          # logged + recorded, execution continues
    real_exit(1)         # always terminates

Prefer passing an ``ExitGuard`` to the code that needs it; installation is
for code that calls ``sys.exit`` directly.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, NoReturn

from exit_guard.guard.exit_guard import ExitGuard
from exit_guard.guard.terminator import PLATFORM_EXIT, SystemTerminator, Terminator
from exit_guard.model import ExitPolicy

_logger = logging.getLogger(__name__)

_install_lock = threading.Lock()
_active: ExitGuard | None = None
_original_exit: Callable[[Any], NoReturn] | None = None


def install_guard(
    policy: ExitPolicy | str | None = None,
    *,
    terminator: Terminator | None = None,
) -> ExitGuard:
    """Replace ``sys.exit`` with a guarded version and return the guard.

    Installing again while a guard is active does not wrap a second time:
    the active guard is returned, with *policy* applied when given.  A new
    *terminator* cannot be swapped into an installed guard.
    """
    global _active, _original_exit

    with _install_lock:
        if _active is not None:
            if terminator is not None and terminator is not _active.terminator:
                _logger.warning("Exit guard already installed; terminator ignored")
            if policy is not None:
                _active.set_policy(policy)
            return _active

        original = sys.exit
        guard = ExitGuard(
            policy,
            terminator=terminator if terminator is not None else SystemTerminator(original),
        )
        sys.exit = guard.exit  # type: ignore[assignment]
        _active = guard
        _original_exit = original
        _logger.info("Exit guard installed (policy=%s)", guard.policy.value)
        return guard


def uninstall_guard() -> None:
    """Restore the ``sys.exit`` captured at install time."""
    global _active, _original_exit

    with _install_lock:
        if _active is None:
            return
        if _original_exit is not None:
            sys.exit = _original_exit  # type: ignore[assignment]
        _active = None
        _original_exit = None
        _logger.info("Exit guard uninstalled")


def active_guard() -> ExitGuard | None:
    return _active


def guarded_exit(code: Any = 0) -> None:
    """Exit through the active guard; forwards when none is installed."""
    guard = _active
    if guard is None:
        real_exit(code)
    guard.exit(code)


def real_exit(code: Any = 0) -> NoReturn:
    """The unwrapped termination primitive.  Always terminates."""
    guard = _active
    if guard is not None:
        guard.real_exit(code)
    exit_fn = _original_exit if _original_exit is not None else PLATFORM_EXIT
    exit_fn(code)
    raise SystemExit(code)


@contextmanager
def guarded(
    policy: ExitPolicy | str | None = None,
    *,
    terminator: Terminator | None = None,
) -> Iterator[ExitGuard]:
    """Install a guard for the duration of a ``with`` block.

    ``sys.exit`` is restored on the way out, including when the block
    raises.  When a guard was already installed it is reused, and its
    previous policy is put back instead of uninstalling.
    """
    previous = _active
    previous_policy = previous.policy if previous is not None else None
    guard = install_guard(policy, terminator=terminator)
    try:
        yield guard
    finally:
        if previous is None:
            uninstall_guard()
        elif previous_policy is not None:
            previous.set_policy(previous_policy)
