"""Shared deadline for a single verification."""

import threading
import time
from typing import Optional

import dns.exception


class DeadlineExceeded(dns.exception.Timeout):
    """The verification deadline elapsed or the caller cancelled."""


class Deadline:
    """Monotonic deadline inherited by every DNS exchange in a verification.

    An optional ``cancel_event`` lets the caller abort early (e.g. the
    underlying connection was dropped); once it is set the deadline behaves
    as if it had already elapsed.

    Cancellation is observed whenever ``remaining()`` is called, i.e. before
    each lookup or query. An exchange already in flight is not interrupted;
    it ends when its own timeout (at most the remaining budget) runs out.
    """

    def __init__(
        self, timeout: float, cancel_event: Optional[threading.Event] = None
    ) -> None:
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout
        self._cancel_event = cancel_event

    @property
    def cancelled(self) -> bool:
        return self._cancel_event is not None and self._cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.cancelled or time.monotonic() >= self._expires_at

    def remaining(self) -> float:
        """Return seconds left before the deadline.

        Raises:
            DeadlineExceeded: If the deadline elapsed or the caller cancelled.
        """
        if self.cancelled:
            raise DeadlineExceeded("verification cancelled by caller")
        left = self._expires_at - time.monotonic()
        if left <= 0:
            raise DeadlineExceeded(f"verification exceeded {self.timeout}s deadline")
        return left
