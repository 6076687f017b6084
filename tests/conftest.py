"""pytest fixtures for testing."""

import pytest

from dnschecker.config import Config
from dnschecker.services.resolver import ResolutionError


class StubResolver:
    """In-memory resolver recording every lookup.

    Each table maps a query name to the answer the matching DNSResolver
    method returns. Names missing from a table raise ResolutionError.
    """

    def __init__(self, a=None, cname=None, mx=None, txt=None, ns=None):
        self.tables = {
            "A": a or {},
            "CNAME": cname or {},
            "MX": mx or {},
            "TXT": txt or {},
            "NS": ns or {},
        }
        self.calls = []

    def _answer(self, rdtype, name):
        self.calls.append((rdtype, name))
        table = self.tables[rdtype]
        if name not in table:
            raise ResolutionError(name, rdtype, Exception(f"no such host: {name}"))
        return table[name]

    def resolve_a(self, name):
        return list(self._answer("A", name))

    def resolve_cname(self, name):
        return self._answer("CNAME", name)

    def resolve_mx(self, name):
        return list(self._answer("MX", name))

    def resolve_txt(self, name):
        return list(self._answer("TXT", name))

    def resolve_ns(self, name):
        return list(self._answer("NS", name))


@pytest.fixture
def make_resolver():
    """Factory for stub resolvers."""
    return StubResolver


@pytest.fixture
def sample_resolver():
    """Stub resolver holding a small, consistent example.com zone."""
    return StubResolver(
        a={
            "example.com": ["203.0.113.5", "203.0.113.6"],
            "www.example.com": ["203.0.113.5"],
        },
        cname={"blog.example.com": "somehost.example.net."},
        mx={"example.com": [(10, "mail.example.com.")]},
        txt={
            "example.com": ["v=spf1 include:_spf.example.com ~all"],
            "_dmarc.example.com": ["v=DMARC1; p=none"],
        },
        ns={"sub.example.com": ["ns1.example.net.", "ns2.example.net."]},
    )


@pytest.fixture
def base_config(tmp_path):
    """Configuration with defaults and history stored in a temp dir."""
    return Config(
        parallel=False,
        concurrency=10,
        dns_timeout=5,
        nameservers=[],
        history_file=str(tmp_path / "domain_history.txt"),
        max_history=8,
        report_format="text",
        verbose=False,
    )
