"""ExitGuard: policy-driven substitute for the termination primitive."""

from __future__ import annotations

import logging
import threading
from typing import Any, NoReturn

from exit_guard.guard.terminator import SystemTerminator, Terminator
from exit_guard.model import ExitPolicy
from exit_guard.model.termination_request import TerminationRequest
from exit_guard.policy.exit_policy import DEFAULT_POLICY, parse_policy

_logger = logging.getLogger(__name__)


class ExitGuard:
    """Decide, per request, whether a process exit really happens.

    Under ``ExitPolicy.INTERCEPT`` :meth:`exit` logs and records the request
    and returns to the caller.  Under ``ExitPolicy.FORWARD`` it hands the
    request to the terminator, which does not return.  :meth:`real_exit`
    always goes to the terminator.

    Policy swaps and the request log share one lock, so a request is handled
    entirely under the policy that was active when it arrived.
    """

    def __init__(
        self,
        policy: ExitPolicy | str | None = DEFAULT_POLICY,
        *,
        terminator: Terminator | None = None,
    ) -> None:
        self._policy = parse_policy(policy)
        self._terminator: Terminator = (
            terminator if terminator is not None else SystemTerminator()
        )
        self._requests: list[TerminationRequest] = []
        self._lock = threading.Lock()

    # ── policy ──────────────────────────────────────────────────────

    @property
    def policy(self) -> ExitPolicy:
        with self._lock:
            return self._policy

    def set_policy(self, policy: ExitPolicy | str | None) -> ExitPolicy:
        """Replace the active policy; returns the previous one."""
        new = parse_policy(policy)
        with self._lock:
            previous, self._policy = self._policy, new
        if previous is not new:
            _logger.info("Exit policy changed: %s -> %s", previous.value, new.value)
        return previous

    @property
    def terminator(self) -> Terminator:
        return self._terminator

    # ── termination ─────────────────────────────────────────────────

    def exit(self, code: Any = 0) -> None:
        """Guarded replacement for ``sys.exit``."""
        request = TerminationRequest.from_exit_arg(code)
        with self._lock:
            intercept = self._policy is ExitPolicy.INTERCEPT
            if intercept:
                self._requests.append(request)
        if intercept:
            _logger.warning("Process exit called with code: %s", request.code)
            return
        _logger.debug("Forwarding exit with code %s", request.code)
        self._terminator(code)

    def real_exit(self, code: Any = 0) -> NoReturn:
        """Terminate regardless of policy."""
        _logger.debug("Real exit with code %s", code)
        self._terminator(code)

    # ── recorded requests ───────────────────────────────────────────

    @property
    def requests(self) -> tuple[TerminationRequest, ...]:
        """Intercepted requests, oldest first."""
        with self._lock:
            return tuple(self._requests)

    def clear(self) -> None:
        with self._lock:
            self._requests.clear()

    def to_dict(self) -> dict:
        with self._lock:
            requests = [r.to_dict() for r in self._requests]
            policy = self._policy.value
        return {"policy": policy, "requests": requests, "count": len(requests)}

    def __repr__(self) -> str:
        return (
            f"ExitGuard(policy={self.policy.value!r}, "
            f"terminator={self._terminator!r}, requests={len(self.requests)})"
        )
