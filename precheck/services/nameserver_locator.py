"""Authoritative nameserver discovery by walking up the zone hierarchy."""

import logging

import dns.exception

from precheck.models.decision import NoAuthorityError, TooManyLabelsError
from precheck.services import system_resolver
from precheck.utils.deadline import Deadline, DeadlineExceeded
from precheck.utils.ip_utils import candidate_zones, split_labels


logger = logging.getLogger(__name__)

DEFAULT_MAX_LABELS = 10


def find_nameservers(
    hostname: str,
    deadline: Deadline,
    max_labels: int = DEFAULT_MAX_LABELS,
) -> list[str]:
    """Find the nameservers for a hostname or its nearest enclosing zone.

    Tries the full hostname first, then each parent name, and returns the
    first non-empty NS set. Lookups go through the system resolver:
    delegation records are far less likely to be poisoned than the final
    A answer.

    Args:
        hostname: Normalized hostname.
        deadline: Shared verification deadline.
        max_labels: Maximum number of dot-separated labels accepted.

    Returns:
        list[str]: Nameserver hostnames in discovery order.

    Raises:
        TooManyLabelsError: If the hostname has more than max_labels labels.
        NoAuthorityError: If no level yields any NS records.
        DeadlineExceeded: If the deadline elapses during discovery.
    """
    labels = split_labels(hostname)
    if len(labels) > max_labels:
        raise TooManyLabelsError(
            hostname, f"{len(labels)} labels exceeds limit of {max_labels}"
        )

    for zone in candidate_zones(hostname):
        try:
            nameservers = system_resolver.lookup_ns(zone, deadline)
        except DeadlineExceeded:
            raise
        except dns.exception.DNSException as e:
            if deadline.expired:
                raise DeadlineExceeded(str(e)) from e
            logger.debug(
                "No NS records at zone level",
                extra={"zone": zone, "error": type(e).__name__},
            )
            continue

        if nameservers:
            logger.debug(
                "Found nameservers",
                extra={"hostname": hostname, "zone": zone, "nameservers": nameservers},
            )
            return nameservers

    raise NoAuthorityError(hostname, "no NS records found at any level")
