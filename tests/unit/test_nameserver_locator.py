"""Unit tests for authoritative nameserver discovery."""

import dns.resolver
import pytest

from precheck.models.decision import NoAuthorityError, TooManyLabelsError
from precheck.services.nameserver_locator import find_nameservers
from precheck.utils.deadline import Deadline, DeadlineExceeded


def test_full_hostname_is_tried_first(fake_dns):
    """Test a hostname that is itself a zone apex stops immediately."""
    fake_dns.ns["example.com"] = ["ns1.example.com"]

    result = find_nameservers("example.com", Deadline(5))

    assert result == ["ns1.example.com"]
    assert fake_dns.ns_lookups() == ["example.com"]


def test_walks_up_to_enclosing_zone(fake_dns):
    """Test discovery walks from most to least specific and stops on success."""
    fake_dns.ns["b.example.com"] = dns.resolver.NoAnswer()
    fake_dns.ns["example.com"] = ["ns1.example.com", "ns2.example.com"]
    fake_dns.ns["com"] = ["a.gtld-servers.net"]

    result = find_nameservers("a.b.example.com", Deadline(5))

    assert result == ["ns1.example.com", "ns2.example.com"]
    assert fake_dns.ns_lookups() == ["a.b.example.com", "b.example.com", "example.com"]


def test_empty_result_continues_walk(fake_dns):
    """Test an empty NS set at one level is not treated as success."""
    fake_dns.ns["www.example.com"] = []
    fake_dns.ns["example.com"] = ["ns1.example.com"]

    assert find_nameservers("www.example.com", Deadline(5)) == ["ns1.example.com"]


def test_top_level_label_is_consulted(fake_dns):
    fake_dns.ns["com"] = ["a.gtld-servers.net"]

    result = find_nameservers("nowhere.example.com", Deadline(5))

    assert result == ["a.gtld-servers.net"]
    assert fake_dns.ns_lookups()[-1] == "com"


def test_no_authority_at_any_level(fake_dns):
    """Test NoAuthority when even the top-level label has no NS records."""
    with pytest.raises(NoAuthorityError):
        find_nameservers("doesnotexist.invalid", Deadline(5))

    assert fake_dns.ns_lookups() == ["doesnotexist.invalid", "invalid"]


def test_too_many_labels_without_lookup(fake_dns):
    """Test more than 10 labels is rejected before any lookup."""
    hostname = ".".join(["l"] * 11)

    with pytest.raises(TooManyLabelsError):
        find_nameservers(hostname, Deadline(5))

    assert fake_dns.calls == []


def test_exactly_max_labels_is_accepted(fake_dns):
    hostname = ".".join(["l"] * 9 + ["com"])
    fake_dns.ns["com"] = ["a.gtld-servers.net"]

    assert find_nameservers(hostname, Deadline(5)) == ["a.gtld-servers.net"]
    assert len(fake_dns.ns_lookups()) == 10


def test_custom_label_limit(fake_dns):
    with pytest.raises(TooManyLabelsError):
        find_nameservers("a.b.example.com", Deadline(5), max_labels=3)


def test_deadline_expiry_propagates(fake_dns):
    """Test an elapsed deadline is not reported as NoAuthority."""
    with pytest.raises(DeadlineExceeded):
        find_nameservers("www.example.com", Deadline(0))
