"""Record matchers comparing config lines with live DNS answers.

Each record type has one matcher. A matcher derives the name to query and
the expected value from the config line, performs a single lookup and
decides whether any returned value matches under the type's comparison
rule:

- A: exact membership of the configured address in the answer set
- CNAME: canonical name contains the configured target
- MX: case-insensitive equality of exchange hostnames
- TXT: exact equality of the full record text
- NS: nameserver hostname contains the configured value
"""

import logging

from dnschecker.models.config_line import ConfigLine, LookupRequest
from dnschecker.models.record_type import RecordType
from dnschecker.models.verdict import Verdict, VerdictStatus
from dnschecker.services.resolver import DNSResolver, ResolutionError
from dnschecker.utils.hostname import (
    APEX_TOKEN,
    address_record_name,
    normalize_hostname,
    qualify_hostname,
    strip_root_dot,
)


logger = logging.getLogger(__name__)

SPF_MARKER = "v=spf1"


class MalformedLineError(ValueError):
    """Config line does not have the fields its record type needs."""


class RecordMatcher:
    """Base class for per-type matchers.

    Subclasses set record_type and implement build_request() and lookup().
    Matchers hold no state between calls, so evaluating the same line
    against the same answers always gives the same verdict.
    """

    record_type: RecordType
    min_fields = 3

    def build_request(self, line: ConfigLine, domain: str) -> LookupRequest:
        raise NotImplementedError

    def lookup(self, resolver: DNSResolver, name: str) -> list[str]:
        raise NotImplementedError

    def is_match(self, candidate: str, expected: str) -> bool:
        return candidate == expected

    def display_value(self, candidate: str) -> str:
        return candidate

    def _verdict(self, line: ConfigLine, status: VerdictStatus, **kwargs) -> Verdict:
        return Verdict(
            line=line.raw,
            status=status,
            keyword=self.record_type.value,
            record_type=self.record_type,
            **kwargs,
        )

    def evaluate(
        self, line: ConfigLine, domain: str, resolver: DNSResolver
    ) -> Verdict:
        """Check one config line against DNS.

        Args:
            line: Parsed config line whose keyword is this matcher's type.
            domain: Base domain of the check session.
            resolver: Resolution service.

        Returns:
            Verdict: MATCHED, MISMATCHED, LOOKUP_FAILED or MALFORMED.
        """
        try:
            if len(line) < self.min_fields:
                raise MalformedLineError(
                    f"{self.record_type.value} record needs at least "
                    f"{self.min_fields} fields, got {len(line)}"
                )
            request = self.build_request(line, domain)
        except MalformedLineError as e:
            return self._verdict(line, VerdictStatus.MALFORMED, detail=str(e))

        try:
            candidates = self.lookup(resolver, request.name)
        except ResolutionError as e:
            return self._verdict(
                line,
                VerdictStatus.LOOKUP_FAILED,
                query_name=request.name,
                detail=str(e),
            )

        matched = tuple(
            self.display_value(candidate)
            for candidate in candidates
            if self.is_match(candidate, request.expected)
        )
        status = VerdictStatus.MATCHED if matched else VerdictStatus.MISMATCHED
        return self._verdict(
            line, status, query_name=request.name, matched_values=matched
        )


class AddressMatcher(RecordMatcher):
    """a <host> <ip>"""

    record_type = RecordType.A

    def build_request(self, line: ConfigLine, domain: str) -> LookupRequest:
        return LookupRequest(
            name=address_record_name(line.host, domain),
            record_type=self.record_type,
            expected=line.value,
        )

    def lookup(self, resolver: DNSResolver, name: str) -> list[str]:
        return resolver.resolve_a(name)


class CanonicalNameMatcher(RecordMatcher):
    """cname <host> <target>"""

    record_type = RecordType.CNAME

    def build_request(self, line: ConfigLine, domain: str) -> LookupRequest:
        return LookupRequest(
            name=qualify_hostname(line.host, domain),
            record_type=self.record_type,
            expected=strip_root_dot(line.value),
        )

    def lookup(self, resolver: DNSResolver, name: str) -> list[str]:
        return [resolver.resolve_cname(name)]

    def is_match(self, candidate: str, expected: str) -> bool:
        return expected in candidate


class MailExchangerMatcher(RecordMatcher):
    """Three export shapes are accepted.

    mx @ <exchanger>                   apex, priority omitted
    mx <exchanger> <priority>          apex
    mx <exchanger> <priority> <host>   subdomain
    """

    record_type = RecordType.MX

    def build_request(self, line: ConfigLine, domain: str) -> LookupRequest:
        if len(line) == 3:
            if line.host == APEX_TOKEN:
                expected = line.value
            else:
                expected = line.host
            name = domain
        elif len(line) == 4:
            name = normalize_hostname(strip_root_dot(line.fields[3]), domain)
            expected = line.host
        else:
            raise MalformedLineError(
                f"mx record needs 3 or 4 fields, got {len(line)}"
            )

        return LookupRequest(
            name=name,
            record_type=self.record_type,
            expected=strip_root_dot(expected),
        )

    def lookup(self, resolver: DNSResolver, name: str) -> list[str]:
        # Preference is not part of the comparison
        return [exchange for _, exchange in resolver.resolve_mx(name)]

    def is_match(self, candidate: str, expected: str) -> bool:
        return strip_root_dot(candidate.lower()) == expected.lower()

    def display_value(self, candidate: str) -> str:
        return strip_root_dot(candidate)


class TextMatcher(RecordMatcher):
    """txt <host> <value tokens...>

    Value tokens are rejoined with single spaces, except for a plain apex
    record whose value is the first token only.
    """

    record_type = RecordType.TXT

    def build_request(self, line: ConfigLine, domain: str) -> LookupRequest:
        host = line.host
        value = line.value
        expected = line.joined_value()

        if host == APEX_TOKEN:
            name = domain
            if SPF_MARKER not in value:
                expected = value
        elif domain in host:
            name = strip_root_dot(host)
        elif SPF_MARKER in value:
            name = qualify_hostname(host, domain)
        elif "domainkey" in host:
            name = normalize_hostname(strip_root_dot(host), domain)
        elif "dmarc" in host:
            # DMARC policy always lives at the apex's _dmarc label
            name = f"_dmarc.{domain}"
        else:
            name = normalize_hostname(strip_root_dot(host), domain)

        return LookupRequest(name=name, record_type=self.record_type, expected=expected)

    def lookup(self, resolver: DNSResolver, name: str) -> list[str]:
        return resolver.resolve_txt(name)


class NameServerMatcher(RecordMatcher):
    """ns <host> <nameserver>"""

    record_type = RecordType.NS

    def build_request(self, line: ConfigLine, domain: str) -> LookupRequest:
        return LookupRequest(
            name=qualify_hostname(line.host, domain),
            record_type=self.record_type,
            expected=strip_root_dot(line.value),
        )

    def lookup(self, resolver: DNSResolver, name: str) -> list[str]:
        return resolver.resolve_ns(name)

    def is_match(self, candidate: str, expected: str) -> bool:
        return expected in candidate


MATCHERS: dict[RecordType, RecordMatcher] = {
    RecordType.A: AddressMatcher(),
    RecordType.CNAME: CanonicalNameMatcher(),
    RecordType.MX: MailExchangerMatcher(),
    RecordType.TXT: TextMatcher(),
    RecordType.NS: NameServerMatcher(),
}

_missing = set(RecordType) - set(MATCHERS)
if _missing:
    raise RuntimeError(f"No matcher registered for: {sorted(t.name for t in _missing)}")


def get_matcher(record_type: RecordType) -> RecordMatcher:
    """Return the matcher registered for a record type."""
    return MATCHERS[record_type]
