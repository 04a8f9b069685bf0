"""Deadline token threaded through the DP loops."""
from __future__ import annotations

import time
from typing import Optional

from neardup.core.errors import ComputationTimeoutError


class Deadline:
    """Wall-clock budget shared by every stage of one detection run.

    A deadline without a timeout never expires, so callers can pass one
    unconditionally.
    """

    def __init__(self, timeout: Optional[float] = None, *, clock=time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._expires_at = None if timeout is None else clock() + timeout

    @property
    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at

    def check(self, stage: str) -> None:
        """Raise ComputationTimeoutError once the budget is spent."""
        if self.expired:
            raise ComputationTimeoutError(stage=stage, timeout=float(self.timeout))

    def __repr__(self) -> str:
        return f"<Deadline timeout={self.timeout} remaining={self.remaining}>"
