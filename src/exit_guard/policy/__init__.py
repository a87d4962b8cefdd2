"""Exit policy parsing and defaults."""

from exit_guard.policy.exit_policy import DEFAULT_POLICY, parse_policy, policy_names

__all__ = ["DEFAULT_POLICY", "parse_policy", "policy_names"]
