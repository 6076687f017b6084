"""DNS resolution service backed by dnspython."""

import logging
from typing import Optional

import dns.exception
import dns.resolver


logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """A lookup could not be answered (NXDOMAIN, no answer, timeout, ...).

    Attributes:
        name: Name that was queried.
        rdtype: Record type that was queried.
        cause: Underlying dnspython exception.
    """

    def __init__(self, name: str, rdtype: str, cause: Exception):
        self.name = name
        self.rdtype = rdtype
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


class DNSResolver:
    """Performs the lookups the record matchers need.

    Every call issues a single query with no retry. A fresh
    dns.resolver.Resolver is built per lookup so that worker threads
    never share resolver state.
    """

    def __init__(self, timeout: int = 5, nameservers: Optional[list[str]] = None):
        """Initialize the resolver settings.

        Args:
            timeout: Total lifetime of a single lookup in seconds.
            nameservers: Resolver IPs to use instead of the system ones.
        """
        self.timeout = timeout
        self.nameservers = list(nameservers) if nameservers else []

    def _new_resolver(self) -> dns.resolver.Resolver:
        resolver = dns.resolver.Resolver()
        if self.nameservers:
            resolver.nameservers = self.nameservers
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout
        return resolver

    def _resolve(self, name: str, rdtype: str, **kwargs) -> dns.resolver.Answer:
        try:
            resolver = self._new_resolver()
            return resolver.resolve(name, rdtype, **kwargs)
        except (dns.exception.DNSException, OSError) as e:
            logger.debug(f"{rdtype} lookup for {name} failed: {type(e).__name__}")
            raise ResolutionError(name, rdtype, e) from e

    def resolve_a(self, name: str) -> list[str]:
        """Resolve every address of a name (A and AAAA).

        Raises:
            ResolutionError: If neither address family could be resolved.
        """
        addresses: list[str] = []
        errors: list[ResolutionError] = []

        for rdtype in ("A", "AAAA"):
            try:
                answers = self._resolve(name, rdtype)
            except ResolutionError as e:
                errors.append(e)
                continue
            addresses.extend(rdata.address for rdata in answers)

        if not addresses and errors:
            raise errors[0]
        return addresses

    def resolve_cname(self, name: str) -> str:
        """Resolve the canonical name of a host, following CNAME chains.

        Returns:
            str: Canonical name with its trailing root dot
                (e.g. "somehost.example.net.").
        """
        answer = self._resolve(name, "A", raise_on_no_answer=False)
        return str(answer.canonical_name)

    def resolve_mx(self, name: str) -> list[tuple[int, str]]:
        """Resolve mail exchangers as (preference, exchange) pairs."""
        answers = self._resolve(name, "MX")
        return [(rdata.preference, str(rdata.exchange)) for rdata in answers]

    def resolve_txt(self, name: str) -> list[str]:
        """Resolve TXT records, joining multi-string records into one string."""
        answers = self._resolve(name, "TXT")
        return [
            b"".join(rdata.strings).decode("utf-8", errors="replace")
            for rdata in answers
        ]

    def resolve_ns(self, name: str) -> list[str]:
        """Resolve the nameserver hostnames delegated for a name."""
        answers = self._resolve(name, "NS")
        return [str(rdata.target) for rdata in answers]
