"""Terminators: injectable stand-ins for the process termination primitive.

A terminator is any callable ``(code) -> NoReturn``.  The guard calls through
one instead of reaching for ``sys.exit`` directly, so tests can swap in a
recording implementation.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Callable, NoReturn, Protocol

from exit_guard.model.termination_request import TerminationRequest

_logger = logging.getLogger(__name__)

# Captured at import, before any guard can replace ``sys.exit``.
PLATFORM_EXIT: Callable[[Any], NoReturn] = sys.exit


class Terminator(Protocol):
    def __call__(self, code: Any = 0) -> NoReturn: ...


class SystemTerminator:
    """Terminate through the platform primitive.

    With ``hard=True`` the process ends via ``os._exit`` after flushing the
    standard streams and logging handlers; ``finally`` blocks and ``atexit``
    hooks do not run.  The status follows ``sys.exit``: ``None`` is 0, and a
    non-integer argument is written to stderr and gives 1.
    """

    def __init__(
        self,
        exit_fn: Callable[[Any], NoReturn] | None = None,
        *,
        hard: bool = False,
    ) -> None:
        self._exit_fn = exit_fn if exit_fn is not None else PLATFORM_EXIT
        self.hard = hard

    def __call__(self, code: Any = 0) -> NoReturn:
        if self.hard:
            status = TerminationRequest.from_exit_arg(code).code
            _logger.debug("Hard exit with code %s", status)
            logging.shutdown()
            if code is not None and not isinstance(code, int):
                print(code, file=sys.stderr)
            for stream in (sys.stdout, sys.stderr):
                try:
                    stream.flush()
                except (OSError, ValueError):
                    pass
            os._exit(status)
        self._exit_fn(code)
        # sys.exit never returns; a replaced exit_fn must not either.
        raise SystemExit(code)

    def __repr__(self) -> str:
        return f"SystemTerminator(hard={self.hard})"


class RecordingTerminator:
    """Record each termination, then raise ``SystemExit`` like the real thing.

    Intended for tests: ``calls`` lists every code in call order.
    """

    def __init__(self) -> None:
        self.calls: list[Any] = []

    def __call__(self, code: Any = 0) -> NoReturn:
        self.calls.append(code)
        raise SystemExit(code)

    def __repr__(self) -> str:
        return f"RecordingTerminator(calls={self.calls!r})"
