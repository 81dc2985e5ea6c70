"""Minimal DNS client for direct queries to a specific nameserver."""

import logging

import dns.message
import dns.query
import dns.rdatatype

from precheck.utils.deadline import Deadline


logger = logging.getLogger(__name__)

DNS_PORT = 53


def query_a(
    hostname: str,
    nameserver_ip: str,
    deadline: Deadline,
    port: int = DNS_PORT,
) -> dns.message.Message:
    """Ask one nameserver directly for the A records of a hostname.

    UDP is used first; a truncated reply is retried over TCP with whatever
    budget the UDP attempt left.

    Args:
        hostname: Name to query.
        nameserver_ip: IP address of the nameserver.
        deadline: Shared verification deadline.
        port: Destination port.

    Returns:
        dns.message.Message: Parsed response.

    Raises:
        dns.exception.DNSException: On timeout or malformed response.
        OSError: On network errors (e.g. connection refused).
    """
    msg = dns.message.make_query(hostname, dns.rdatatype.A)
    try:
        return dns.query.udp(
            msg,
            nameserver_ip,
            timeout=deadline.remaining(),
            port=port,
            raise_on_truncation=True,
        )
    except dns.message.Truncated:
        logger.debug(
            "Truncated UDP reply, retrying over TCP",
            extra={"hostname": hostname, "nameserver": nameserver_ip},
        )

    return dns.query.tcp(msg, nameserver_ip, timeout=deadline.remaining(), port=port)
