"""Hostname and IP address utilities for the ownership pre-check."""

import ipaddress
from typing import Iterator, Optional


def normalize_hostname(hostname: str) -> str:
    """Normalize a user-supplied hostname for verification.

    Strips surrounding whitespace, lower-cases, and removes a single trailing
    root dot.

    Args:
        hostname: Raw hostname as presented by the client (e.g. TLS SNI).

    Returns:
        str: Normalized hostname (may be empty for degenerate input).

    Examples:
        >>> normalize_hostname(" Example.COM. ")
        'example.com'
    """
    hostname = hostname.strip().lower()
    if hostname.endswith("."):
        hostname = hostname[:-1]
    return hostname


def is_literal_ip(hostname: str) -> bool:
    """Check whether a hostname is actually a literal IPv4 or IPv6 address.

    Bracketed IPv6 (``[::1]``) and scoped IPv6 (``fe80::1%eth0``) are
    recognised as well.

    Args:
        hostname: Hostname string to test.

    Returns:
        bool: True if the string parses as an IP address, False otherwise.

    Examples:
        >>> is_literal_ip("203.0.113.45")
        True
        >>> is_literal_ip("[2001:db8::1]")
        True
        >>> is_literal_ip("example.com")
        False
    """
    candidate = hostname.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    try:
        ipaddress.ip_address(candidate)
        return True
    except ValueError:
        return False


def parse_ipv4(ip: str) -> Optional[ipaddress.IPv4Address]:
    """Parse an IPv4 literal.

    Args:
        ip: Address string.

    Returns:
        Optional[IPv4Address]: Parsed address, or None if not valid IPv4.
    """
    try:
        addr = ipaddress.ip_address(ip.strip())
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv4Address):
        return addr
    return None


def is_global_ipv4(ip: str) -> bool:
    """Check whether an address is a publicly routable IPv4 address.

    Loopback, link-local, private, multicast, and unspecified addresses are
    rejected.

    Examples:
        >>> is_global_ipv4("8.8.8.8")
        True
        >>> is_global_ipv4("192.168.1.10")
        False
        >>> is_global_ipv4("::1")
        False
    """
    addr = parse_ipv4(ip)
    if addr is None:
        return False
    return addr.is_global and not addr.is_multicast


def split_labels(hostname: str) -> list[str]:
    """Split a hostname into its dot-separated labels."""
    return hostname.split(".")


def candidate_zones(hostname: str) -> Iterator[str]:
    """Yield candidate zone names from most to least specific.

    Args:
        hostname: Normalized hostname.

    Yields:
        str: The full hostname, then each parent name down to the
             top-level label.

    Examples:
        >>> list(candidate_zones("www.example.com"))
        ['www.example.com', 'example.com', 'com']
    """
    labels = split_labels(hostname)
    for i in range(len(labels)):
        yield ".".join(labels[i:])
