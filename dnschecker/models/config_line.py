"""Config line and lookup request models."""

from dataclasses import dataclass, field

from dnschecker.models.record_type import RecordType


@dataclass(frozen=True)
class ConfigLine:
    """One directive from a registrar DNS export.

    Attributes:
        raw: Line exactly as read (without the trailing newline).
        fields: Whitespace-split tokens. fields[0] is the record keyword,
            fields[1] the host, fields[2:] the value tokens.
    """

    raw: str
    fields: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, raw: str) -> "ConfigLine":
        """Split a raw line into whitespace-delimited fields."""
        raw = raw.rstrip("\r\n")
        return cls(raw=raw, fields=tuple(raw.split()))

    @property
    def keyword(self) -> str:
        return self.fields[0] if self.fields else ""

    @property
    def host(self) -> str:
        return self.fields[1] if len(self.fields) > 1 else ""

    @property
    def value(self) -> str:
        return self.fields[2] if len(self.fields) > 2 else ""

    @property
    def value_tokens(self) -> tuple[str, ...]:
        """All tokens after the host."""
        return self.fields[2:]

    def joined_value(self) -> str:
        """Rejoin value tokens the export split on whitespace.

        SPF and DKIM values often contain spaces, so every token after the
        host belongs to the same record text.
        """
        return " ".join(self.value_tokens)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass(frozen=True)
class LookupRequest:
    """Name to resolve and the value the answer must match.

    Attributes:
        name: Fully-qualified name to query.
        record_type: Record type to query.
        expected: Canonical expected value derived from the config line.
    """

    name: str
    record_type: RecordType
    expected: str
