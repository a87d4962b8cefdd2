"""Exit policy: how termination requests are handled.

Philosophy:
  - ``forward`` is the default; nothing is suppressed unless asked for
  - Unknown policy names are fail-safe (``forward``), so a typo in an
    environment variable never swallows a genuine exit
"""

from __future__ import annotations

from exit_guard.model import ExitPolicy


DEFAULT_POLICY = ExitPolicy.FORWARD

_ALIASES: dict[str, ExitPolicy] = {
    "forward": ExitPolicy.FORWARD,
    "exit": ExitPolicy.FORWARD,
    "intercept": ExitPolicy.INTERCEPT,
    "suppress": ExitPolicy.INTERCEPT,
}


def parse_policy(value: str | ExitPolicy | None) -> ExitPolicy:
    """Normalize a raw policy string to an ``ExitPolicy``.

    Empty or missing values give ``DEFAULT_POLICY``; unknown values are
    treated as ``forward``.
    """
    if isinstance(value, ExitPolicy):
        return value
    if not value:
        return DEFAULT_POLICY
    v = value.strip().lower()
    return _ALIASES.get(v, ExitPolicy.FORWARD)


def policy_names() -> list[str]:
    """Canonical policy names, in declaration order (for CLI choices)."""
    return [p.value for p in ExitPolicy]
