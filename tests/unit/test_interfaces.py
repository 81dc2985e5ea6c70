"""Unit tests for local interface enumeration."""

import socket
from collections import namedtuple
from unittest.mock import patch

import psutil

from precheck.utils.interfaces import global_interface_addresses


Snic = namedtuple("Snic", ["family", "address", "netmask", "broadcast", "ptp"])


def _snic(family, address):
    return Snic(family, address, None, None, None)


@patch("precheck.utils.interfaces.psutil.net_if_addrs")
def test_only_global_ipv4_addresses_collected(mock_net_if_addrs):
    """Test loopback, private, link-local and IPv6 addresses are skipped."""
    mock_net_if_addrs.return_value = {
        "lo": [_snic(socket.AF_INET, "127.0.0.1"), _snic(socket.AF_INET6, "::1")],
        "eth0": [
            _snic(psutil.AF_LINK, "52:54:00:12:34:56"),
            _snic(socket.AF_INET, "93.184.216.34"),
            _snic(socket.AF_INET6, "2606:2800:220:1::1"),
            _snic(socket.AF_INET6, "fe80::1"),
        ],
        "eth1": [
            _snic(socket.AF_INET, "10.0.0.5"),
            _snic(socket.AF_INET, "169.254.10.10"),
        ],
    }

    assert global_interface_addresses() == ["93.184.216.34"]


@patch("precheck.utils.interfaces.psutil.net_if_addrs")
def test_no_interfaces(mock_net_if_addrs):
    mock_net_if_addrs.return_value = {}

    assert global_interface_addresses() == []
