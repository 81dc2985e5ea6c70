"""Verification decision models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DenialReason(Enum):
    """Closed set of reasons a certificate must not be issued."""

    IS_LITERAL_IP = "IsLiteralIP"  # Input is a bare address, not a hostname
    TOO_MANY_LABELS = "TooManyLabels"  # More labels than the sanity bound
    NO_AUTHORITY = "NoAuthority"  # No nameservers found at any zone level
    NOT_OURS = "NotOurs"  # DNS designates addresses outside the registry


@dataclass(frozen=True)
class Decision:
    """Outcome of a single ownership verification.

    Attributes:
        hostname: Hostname that was verified.
        allowed: True if issuance may proceed.
        reason: Denial reason; None when allowed.

    Invariants:
        - allowed is True if and only if reason is None.
    """

    hostname: str
    allowed: bool
    reason: Optional[DenialReason] = None

    def __post_init__(self) -> None:
        if self.allowed == (self.reason is not None):
            raise ValueError("reason must be set exactly when denied")

    @classmethod
    def allow(cls, hostname: str) -> "Decision":
        return cls(hostname=hostname, allowed=True)

    @classmethod
    def deny(cls, hostname: str, reason: DenialReason) -> "Decision":
        return cls(hostname=hostname, allowed=False, reason=reason)

    def to_json(self) -> dict:
        """Serialize to JSON-compatible dict.

        Returns:
            dict: JSON-serializable representation.
        """
        return {
            "hostname": self.hostname,
            "allowed": self.allowed,
            "reason": self.reason.value if self.reason else None,
        }


class PrecheckError(Exception):
    """Base class for failures that map directly to a denial reason."""

    reason: DenialReason

    def __init__(self, hostname: str, message: str) -> None:
        super().__init__(message)
        self.hostname = hostname


class TooManyLabelsError(PrecheckError):
    reason = DenialReason.TOO_MANY_LABELS


class NoAuthorityError(PrecheckError):
    reason = DenialReason.NO_AUTHORITY


class PrecheckDenied(Exception):
    """Raised by exception-style issuance hooks when a hostname is refused."""

    def __init__(self, decision: Decision) -> None:
        super().__init__(
            f"refusing certificate for {decision.hostname}: {decision.reason.value}"
        )
        self.decision = decision
