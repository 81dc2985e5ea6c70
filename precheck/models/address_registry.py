"""Address registry: this server's own public IPv4 addresses."""

import ipaddress
import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, Optional

from precheck.utils.interfaces import global_interface_addresses
from precheck.utils.ip_utils import parse_ipv4


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddressRegistry:
    """Immutable set of IPv4 addresses that designate this server.

    Built once at startup and shared read-only by every verification.

    Attributes:
        addresses: Registry members.

    Invariants:
        - Interface-sourced members are global unicast.
        - Operator-configured members are trusted as given.
    """

    addresses: FrozenSet[ipaddress.IPv4Address] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        configured: Iterable[str] = (),
        scan_interfaces: bool = True,
        interface_source: Optional[Callable[[], list[str]]] = None,
    ) -> "AddressRegistry":
        """Build the registry from configured literals and local interfaces.

        Both sources contribute to the same set. An empty registry is not an
        error; every verification will simply be denied.

        Args:
            configured: Operator-supplied address literals (e.g. PUBLIC_IPS).
            scan_interfaces: Whether to add global IPv4 interface addresses.
            interface_source: Override for interface enumeration.

        Returns:
            AddressRegistry: Populated registry.
        """
        members: set[ipaddress.IPv4Address] = set()

        for literal in configured:
            addr = parse_ipv4(literal)
            if addr is None:
                logger.warning(
                    "Ignoring configured address that is not valid IPv4",
                    extra={"ip": literal},
                )
                continue
            members.add(addr)

        if scan_interfaces:
            source = interface_source or global_interface_addresses
            for literal in source():
                addr = parse_ipv4(literal)
                if addr is not None:
                    members.add(addr)

        if not members:
            logger.warning("Address registry is empty; all hostnames will be denied")

        return cls(addresses=frozenset(members))

    def contains(self, ip: str) -> bool:
        """Exact-match membership test; no prefix matching."""
        addr = parse_ipv4(ip)
        return addr is not None and addr in self.addresses

    def __contains__(self, ip: str) -> bool:
        return self.contains(ip)

    def __len__(self) -> int:
        return len(self.addresses)

    def to_list(self) -> list[str]:
        return sorted(str(a) for a in self.addresses)
