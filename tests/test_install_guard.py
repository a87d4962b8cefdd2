"""Process-wide installation over ``sys.exit``."""

from __future__ import annotations

import logging
import sys

import pytest

from exit_guard.guard import (
    RecordingTerminator,
    active_guard,
    guarded,
    guarded_exit,
    install_guard,
    real_exit,
    uninstall_guard,
)
from exit_guard.model import ExitPolicy


class TestInstall:
    def test_replaces_sys_exit(self) -> None:
        original = sys.exit

        guard = install_guard("intercept")

        assert sys.exit == guard.exit
        assert sys.exit is not original
        assert active_guard() is guard

    def test_intercepted_sys_exit_returns(self, caplog) -> None:
        guard = install_guard(ExitPolicy.INTERCEPT)

        with caplog.at_level(logging.WARNING):
            sys.exit(7)

        assert [r.code for r in guard.requests] == [7]
        assert "Process exit called with code: 7" in caplog.text

    def test_forwarded_sys_exit_terminates(self) -> None:
        install_guard(ExitPolicy.FORWARD)

        with pytest.raises(SystemExit) as exc_info:
            sys.exit(3)

        assert exc_info.value.code == 3

    def test_second_install_does_not_wrap_again(self) -> None:
        first = install_guard(ExitPolicy.FORWARD)

        second = install_guard(ExitPolicy.INTERCEPT)

        assert second is first
        assert first.policy is ExitPolicy.INTERCEPT
        assert sys.exit == first.exit
        # The real path still reaches the platform primitive, not a wrapper.
        with pytest.raises(SystemExit) as exc_info:
            real_exit(9)
        assert exc_info.value.code == 9

    def test_second_install_without_policy_keeps_policy(self) -> None:
        first = install_guard(ExitPolicy.INTERCEPT)

        assert install_guard() is first
        assert first.policy is ExitPolicy.INTERCEPT

    def test_injected_terminator_is_used(self) -> None:
        terminator = RecordingTerminator()
        install_guard(ExitPolicy.FORWARD, terminator=terminator)

        with pytest.raises(SystemExit):
            sys.exit(4)

        assert terminator.calls == [4]


class TestUninstall:
    def test_restores_sys_exit(self) -> None:
        original = sys.exit
        install_guard("intercept")

        uninstall_guard()

        assert sys.exit is original
        assert active_guard() is None

    def test_noop_when_not_installed(self) -> None:
        original = sys.exit

        uninstall_guard()

        assert sys.exit is original


# ── module-level primitives ─────────────────────────────────────────

class TestModulePrimitives:
    def test_guarded_exit_without_guard_terminates(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            guarded_exit(2)
        assert exc_info.value.code == 2

    def test_guarded_exit_uses_active_guard(self) -> None:
        guard = install_guard(ExitPolicy.INTERCEPT)

        guarded_exit(2)
        guarded_exit(3)

        assert [r.code for r in guard.requests] == [2, 3]

    def test_real_exit_bypasses_intercept(self) -> None:
        guard = install_guard(ExitPolicy.INTERCEPT)

        with pytest.raises(SystemExit) as exc_info:
            real_exit(1)

        assert exc_info.value.code == 1
        assert guard.requests == ()

    def test_real_exit_without_guard_terminates(self) -> None:
        with pytest.raises(SystemExit):
            real_exit(0)


class TestGuardedContext:
    def test_installs_and_restores(self) -> None:
        original = sys.exit

        with guarded("intercept") as guard:
            sys.exit(2)
            sys.exit(3)
            assert active_guard() is guard

        assert [r.code for r in guard.requests] == [2, 3]
        assert sys.exit is original
        assert active_guard() is None

    def test_restores_when_block_raises(self) -> None:
        original = sys.exit

        with pytest.raises(SystemExit):
            with guarded("forward"):
                sys.exit(5)

        assert sys.exit is original

    def test_nested_block_restores_outer_policy(self) -> None:
        outer = install_guard(ExitPolicy.FORWARD)

        with guarded(ExitPolicy.INTERCEPT) as inner:
            assert inner is outer
            sys.exit(8)

        assert active_guard() is outer
        assert outer.policy is ExitPolicy.FORWARD
        assert [r.code for r in outer.requests] == [8]
