"""System (cache-permitting) DNS resolver lookups.

These answers may come from a local or upstream cache and are never trusted
as an authoritative negative.
"""

import logging

import dns.resolver

from precheck.utils.deadline import Deadline


logger = logging.getLogger(__name__)


def _resolver(deadline: Deadline) -> dns.resolver.Resolver:
    remaining = deadline.remaining()
    resolver = dns.resolver.Resolver()
    resolver.timeout = remaining
    resolver.lifetime = remaining  # Total time for the lookup
    return resolver


def lookup_ipv4(hostname: str, deadline: Deadline) -> list[str]:
    """Resolve a hostname to its IPv4 addresses.

    Args:
        hostname: Name to resolve.
        deadline: Shared verification deadline.

    Returns:
        list[str]: IPv4 addresses (CNAME chains are followed by the resolver).

    Raises:
        dns.exception.DNSException: On NXDOMAIN, no answer, timeout, etc.
    """
    answers = _resolver(deadline).resolve(hostname, "A")
    return [rdata.address for rdata in answers]


def lookup_ns(name: str, deadline: Deadline) -> list[str]:
    """Look up the nameserver hostnames published at a name.

    Args:
        name: Candidate zone name.
        deadline: Shared verification deadline.

    Returns:
        list[str]: Nameserver hostnames without the trailing root dot.

    Raises:
        dns.exception.DNSException: On NXDOMAIN, no answer, timeout, etc.
    """
    answers = _resolver(deadline).resolve(name, "NS")
    return [rdata.target.to_text().rstrip(".") for rdata in answers]
