"""Resolution oracle: does a hostname point at one of our addresses?"""

import logging
from enum import Enum

import dns.exception
import dns.rdatatype

from precheck.models.address_registry import AddressRegistry
from precheck.services import direct_query, system_resolver
from precheck.services.nameserver_locator import DEFAULT_MAX_LABELS, find_nameservers
from precheck.utils.deadline import Deadline, DeadlineExceeded


logger = logging.getLogger(__name__)


class OracleResult(Enum):
    MATCH = "MATCH"
    NO_MATCH = "NO_MATCH"


class ResolutionOracle:
    """Two-tier check of a hostname against the address registry.

    The fast path asks the system resolver and can only confirm a match.
    The slow path asks the authoritative nameservers directly.
    """

    def __init__(
        self,
        registry: AddressRegistry,
        max_labels: int = DEFAULT_MAX_LABELS,
        dns_port: int = direct_query.DNS_PORT,
    ) -> None:
        self.registry = registry
        self.max_labels = max_labels
        self.dns_port = dns_port

    def _any_ours(self, addresses: list[str]) -> bool:
        return any(self.registry.contains(ip) for ip in addresses)

    def fast_path(self, hostname: str, deadline: Deadline) -> OracleResult:
        """Check the system resolver's answer.

        A lookup error or non-matching answer is inconclusive and reported as
        NO_MATCH; it is never an authoritative negative.
        """
        try:
            addresses = system_resolver.lookup_ipv4(hostname, deadline)
        except DeadlineExceeded:
            raise
        except dns.exception.DNSException as e:
            logger.debug(
                "Fast path lookup failed",
                extra={"hostname": hostname, "error": type(e).__name__},
            )
            return OracleResult.NO_MATCH

        if self._any_ours(addresses):
            logger.info(
                "Fast path matched",
                extra={"hostname": hostname, "addresses": addresses},
            )
            return OracleResult.MATCH
        return OracleResult.NO_MATCH

    def slow_path(self, hostname: str, deadline: Deadline) -> OracleResult:
        """Query each authoritative nameserver directly, in order.

        Per-nameserver failures are skipped. The first matching A record, or
        CNAME whose target resolves to one of our addresses, wins.

        Raises:
            TooManyLabelsError: Propagated from nameserver discovery.
            NoAuthorityError: Propagated from nameserver discovery.
            DeadlineExceeded: If the deadline elapses.
        """
        nameservers = find_nameservers(hostname, deadline, self.max_labels)

        for nameserver in nameservers:
            if self._check_nameserver(hostname, nameserver, deadline):
                return OracleResult.MATCH
            # Stop once the deadline has elapsed
            deadline.remaining()

        return OracleResult.NO_MATCH

    def _check_nameserver(
        self, hostname: str, nameserver: str, deadline: Deadline
    ) -> bool:
        try:
            ns_addresses = system_resolver.lookup_ipv4(nameserver, deadline)
            response = direct_query.query_a(
                hostname, ns_addresses[0], deadline, port=self.dns_port
            )
        except (dns.exception.DNSException, OSError, IndexError, ValueError) as e:
            logger.debug(
                "Nameserver query failed, trying next",
                extra={
                    "hostname": hostname,
                    "nameserver": nameserver,
                    "error": type(e).__name__,
                },
            )
            return False

        for rrset in response.answer:
            rdtype = dns.rdatatype.to_text(rrset.rdtype)
            for rdata in rrset:
                record = f"{rrset.name} {rrset.ttl} IN {rdtype} {rdata}"
                logger.debug(
                    "Authoritative answer record",
                    extra={"nameserver": nameserver, "record": record},
                )
                if rrset.rdtype == dns.rdatatype.A:
                    if self.registry.contains(rdata.address):
                        logger.info(
                            "Authoritative A record matched",
                            extra={"nameserver": nameserver, "record": record},
                        )
                        return True
                elif rrset.rdtype == dns.rdatatype.CNAME:
                    if self._cname_target_is_ours(rdata.target.to_text(), deadline):
                        logger.info(
                            "Authoritative CNAME target matched",
                            extra={"nameserver": nameserver, "record": record},
                        )
                        return True
        return False

    def _cname_target_is_ours(self, target: str, deadline: Deadline) -> bool:
        # CNAME targets are verified through the system resolver only
        try:
            addresses = system_resolver.lookup_ipv4(target, deadline)
        except dns.exception.DNSException:
            return False
        return self._any_ours(addresses)
