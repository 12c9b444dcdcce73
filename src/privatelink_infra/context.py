"""Cooperative cancellation for remote calls."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from privatelink_infra.errors import OperationCancelledError

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class OperationContext:
    """Deadline shared by every remote call made during one invocation.

    ``deadline`` is a ``time.monotonic()`` timestamp; ``None`` means the
    invocation may wait indefinitely.
    """

    deadline: float | None = None
    _clock: Any = field(default=time.monotonic, repr=False)

    @classmethod
    def with_timeout(cls, timeout_seconds: float | None) -> OperationContext:
        """Create a context that expires ``timeout_seconds`` from now."""
        if timeout_seconds is None:
            return cls()
        return cls(deadline=time.monotonic() + timeout_seconds)

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` when unbounded."""
        if self.deadline is None:
            return None
        return max(self.deadline - self._clock(), 0.0)

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def ensure_active(self, operation: str) -> None:
        """Raise ``OperationCancelledError`` when the deadline has passed."""
        if self.expired():
            logger.warning("operation_cancelled", extra={"operation": operation})
            raise OperationCancelledError(f"Deadline expired before {operation}")

    def call_options(self, operation: str) -> dict[str, Any]:
        """Keyword arguments passed to a synchronous Azure SDK call or a poller wait.

        Not for ``begin_*`` calls: their keyword arguments are forwarded to the
        polling method, which takes its own ``timeout``.
        Raises ``OperationCancelledError`` when the deadline has passed, so no
        request is sent.
        """
        self.ensure_active(operation)
        remaining = self.remaining()
        if remaining is None:
            return {}
        return {"timeout": remaining}
