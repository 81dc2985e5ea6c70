"""pytest fixtures for testing."""

import dns.exception
import dns.message
import dns.resolver
import dns.rrset
import pytest

from precheck.models.address_registry import AddressRegistry


OUR_IP = "203.0.113.10"


def make_response(hostname: str, *records: tuple[str, str]) -> dns.message.Message:
    """Build an authoritative response with the given (rdtype, value) answers."""
    query = dns.message.make_query(hostname, "A")
    response = dns.message.make_response(query)
    for rdtype, value in records:
        response.answer.append(
            dns.rrset.from_text(hostname.rstrip(".") + ".", 300, "IN", rdtype, value)
        )
    return response


class FakeDNS:
    """In-memory DNS world standing in for the system resolver and nameservers.

    Attributes:
        a: hostname -> list of IPv4 addresses (or an exception to raise).
        ns: zone name -> list of nameserver hostnames (or an exception).
        authoritative: nameserver IP -> response message (or an exception).
        calls: Every lookup performed, as (kind, name) tuples.
    """

    def __init__(self):
        self.a = {}
        self.ns = {}
        self.authoritative = {}
        self.calls = []

    @staticmethod
    def _answer(table, name):
        value = table.get(name.rstrip("."))
        if value is None:
            raise dns.resolver.NXDOMAIN()
        if isinstance(value, Exception):
            raise value
        return list(value)

    def lookup_ipv4(self, hostname, deadline):
        deadline.remaining()
        self.calls.append(("A", hostname.rstrip(".")))
        return self._answer(self.a, hostname)

    def lookup_ns(self, name, deadline):
        deadline.remaining()
        self.calls.append(("NS", name))
        return self._answer(self.ns, name)

    def query_a(self, hostname, nameserver_ip, deadline, port=53):
        deadline.remaining()
        self.calls.append(("QUERY", nameserver_ip))
        value = self.authoritative.get(nameserver_ip)
        if value is None:
            raise dns.exception.Timeout()
        if isinstance(value, Exception):
            raise value
        return value

    def queried_nameservers(self):
        return [name for kind, name in self.calls if kind == "QUERY"]

    def ns_lookups(self):
        return [name for kind, name in self.calls if kind == "NS"]


@pytest.fixture
def fake_dns(monkeypatch):
    """Replace system resolver lookups and direct queries with a FakeDNS."""
    fake = FakeDNS()
    monkeypatch.setattr(
        "precheck.services.system_resolver.lookup_ipv4", fake.lookup_ipv4
    )
    monkeypatch.setattr("precheck.services.system_resolver.lookup_ns", fake.lookup_ns)
    monkeypatch.setattr("precheck.services.direct_query.query_a", fake.query_a)
    return fake


@pytest.fixture
def registry():
    """Registry holding a single operator-configured address."""
    return AddressRegistry.build(configured=[OUR_IP], scan_interfaces=False)


@pytest.fixture
def example_zone(fake_dns):
    """example.com delegated to two nameservers with resolvable addresses."""
    fake_dns.ns["example.com"] = ["ns1.example.com", "ns2.example.com"]
    fake_dns.a["ns1.example.com"] = ["198.51.100.1"]
    fake_dns.a["ns2.example.com"] = ["198.51.100.2"]
    return fake_dns


@pytest.fixture
def answer():
    """Factory for authoritative responses: answer(hostname, ("A", ip), ...)."""
    return make_response
