"""TerminationRequest: one call to the termination primitive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TerminationRequest:
    """Immutable record of a requested process exit."""

    code: int

    @classmethod
    def from_exit_arg(cls, arg: Any) -> "TerminationRequest":
        """Normalize a ``sys.exit`` argument to an integer code.

        ``None`` means success (0), integers pass through, and anything else
        (e.g. a message string) is a failure (1), mirroring how the
        interpreter turns ``SystemExit`` into a process status.
        """
        if arg is None:
            return cls(code=0)
        if isinstance(arg, bool):
            return cls(code=int(arg))
        if isinstance(arg, int):
            return cls(code=arg)
        return cls(code=1)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {"code": self.code}
