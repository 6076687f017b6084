"""Per-line verdict models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dnschecker.models.record_type import RecordType


class VerdictStatus(Enum):
    """Outcome of checking one config line."""

    MATCHED = "MATCHED"  # Lookup succeeded and a returned value matched
    MISMATCHED = "MISMATCHED"  # Lookup succeeded, nothing matched
    LOOKUP_FAILED = "LOOKUP_FAILED"  # Resolver raised (NXDOMAIN, timeout, ...)
    UNTESTED = "UNTESTED"  # Wildcard or unsupported type, never resolved
    MALFORMED = "MALFORMED"  # Known type with unusable field count


@dataclass(frozen=True)
class Verdict:
    """Result of checking a single config line.

    Attributes:
        line: Config line as read.
        status: Outcome classification.
        keyword: Record keyword from the line (e.g. "txt").
        record_type: Parsed record type, None for untested/unknown keywords.
        query_name: Name that was resolved, if any.
        matched_values: Returned values that matched the config.
        detail: Resolver error, untested reason or malformed-line message.
    """

    line: str
    status: VerdictStatus
    keyword: str = ""
    record_type: Optional[RecordType] = None
    query_name: Optional[str] = None
    matched_values: tuple[str, ...] = field(default_factory=tuple)
    detail: str = ""

    def is_ok(self) -> bool:
        return self.status == VerdictStatus.MATCHED

    def is_untested(self) -> bool:
        return self.status == VerdictStatus.UNTESTED

    def is_error(self) -> bool:
        """Mismatches, lookup failures and malformed lines all count as errors."""
        return self.status in (
            VerdictStatus.MISMATCHED,
            VerdictStatus.LOOKUP_FAILED,
            VerdictStatus.MALFORMED,
        )

    def body_lines(self) -> list[str]:
        """Config echo plus Type/Name/Value lines."""
        lines = [f"Config : {self.line}"]
        if self.query_name is not None:
            lines.append(f"Type   : {self.keyword}")
            lines.append(f"Name   : {self.query_name}")
        lines.extend(f"Value  : {value}" for value in self.matched_values)
        return lines

    def status_lines(self) -> list[str]:
        if self.status == VerdictStatus.MATCHED:
            return ["OK"]
        if self.status == VerdictStatus.UNTESTED:
            return [f"Untested : {self.detail}"]
        if self.status == VerdictStatus.LOOKUP_FAILED:
            label = self.record_type.label if self.record_type else self.keyword
            return ["Error", f"DNS lookup failed for {label} record: {self.detail}"]
        if self.status == VerdictStatus.MALFORMED:
            return ["Error", f"Malformed line: {self.detail}"]
        return ["Error"]

    def to_json(self) -> dict:
        return {
            "line": self.line,
            "status": self.status.value,
            "type": self.keyword,
            "name": self.query_name,
            "values": list(self.matched_values),
            "detail": self.detail,
        }
