"""Decision gate: the single allow/deny entry point for on-demand issuance."""

import logging
import threading
import time
from typing import Optional

from precheck.models.address_registry import AddressRegistry
from precheck.models.decision import (
    Decision,
    DenialReason,
    PrecheckDenied,
    PrecheckError,
)
from precheck.services.direct_query import DNS_PORT
from precheck.services.logger import log_decision
from precheck.services.nameserver_locator import DEFAULT_MAX_LABELS
from precheck.services.resolution_oracle import OracleResult, ResolutionOracle
from precheck.utils.deadline import Deadline, DeadlineExceeded
from precheck.utils.ip_utils import (
    is_literal_ip,
    normalize_hostname,
    split_labels,
)


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class DecisionGate:
    """Decide whether a certificate may be issued for a hostname.

    Verification is read-only and computed fresh on every call; decisions are
    never cached, so concurrent calls need no coordination.

    Args:
        registry: This server's public addresses.
        timeout: Overall deadline in seconds for one verification.
        max_labels: Label sanity bound for nameserver discovery.
        dns_port: Port for direct nameserver queries.
    """

    def __init__(
        self,
        registry: AddressRegistry,
        timeout: float = DEFAULT_TIMEOUT,
        max_labels: int = DEFAULT_MAX_LABELS,
        dns_port: int = DNS_PORT,
    ) -> None:
        self.registry = registry
        self.timeout = timeout
        self.max_labels = max_labels
        self.oracle = ResolutionOracle(
            registry, max_labels=max_labels, dns_port=dns_port
        )

    def verify(
        self, hostname: str, cancel_event: Optional[threading.Event] = None
    ) -> Decision:
        """Verify that a hostname currently designates this server.

        Args:
            hostname: Hostname presented by the client.
            cancel_event: Optional event the caller sets to abort early.

        Returns:
            Decision: Allowed, or denied with a specific reason.
        """
        start = time.monotonic()
        decision = self._decide(hostname, cancel_event)
        log_decision(
            decision=decision,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return decision

    def _decide(
        self, hostname: str, cancel_event: Optional[threading.Event]
    ) -> Decision:
        if is_literal_ip(hostname):
            return Decision.deny(hostname, DenialReason.IS_LITERAL_IP)

        name = normalize_hostname(hostname)
        if not name.strip("."):
            return Decision.deny(hostname, DenialReason.NO_AUTHORITY)
        if len(split_labels(name)) > self.max_labels:
            return Decision.deny(hostname, DenialReason.TOO_MANY_LABELS)

        deadline = Deadline(self.timeout, cancel_event)
        try:
            if self.oracle.fast_path(name, deadline) is OracleResult.MATCH:
                return Decision.allow(hostname)

            if self.oracle.slow_path(name, deadline) is OracleResult.MATCH:
                return Decision.allow(hostname)
        except PrecheckError as e:
            logger.debug(str(e), extra={"hostname": hostname})
            return Decision.deny(hostname, e.reason)
        except DeadlineExceeded as e:
            logger.warning(
                "Verification did not finish before the deadline",
                extra={"hostname": hostname, "error": str(e)},
            )
            return Decision.deny(hostname, DenialReason.NOT_OURS)

        return Decision.deny(hostname, DenialReason.NOT_OURS)

    def is_allowed(self, hostname: str) -> bool:
        return self.verify(hostname).allowed

    def ask(self, hostname: str) -> None:
        """Exception-style hook for issuance subsystems.

        Raises:
            PrecheckDenied: If the hostname is denied.
        """
        decision = self.verify(hostname)
        if not decision.allowed:
            raise PrecheckDenied(decision)
