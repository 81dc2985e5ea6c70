"""Local network interface enumeration."""

import logging
import socket

import psutil

from precheck.utils.ip_utils import is_global_ipv4


logger = logging.getLogger(__name__)


def global_interface_addresses() -> list[str]:
    """Collect publicly routable IPv4 addresses bound to local interfaces.

    Non-IPv4 and non-global addresses are skipped silently.

    Returns:
        list[str]: IPv4 addresses in interface enumeration order.
    """
    addresses: list[str] = []
    for iface, snics in psutil.net_if_addrs().items():
        for snic in snics:
            if snic.family != socket.AF_INET:
                continue
            if is_global_ipv4(snic.address):
                logger.debug(
                    "Found public interface address",
                    extra={"interface": iface, "ip": snic.address},
                )
                addresses.append(snic.address)
    return addresses
