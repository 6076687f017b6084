"""Record types understood by the matching engine."""

from enum import Enum
from typing import Optional


class RecordType(Enum):
    """DNS record types that can be verified.

    Values are the lowercase keywords used in the registrar export.
    """

    A = "a"
    CNAME = "cname"
    MX = "mx"
    TXT = "txt"
    NS = "ns"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["RecordType"]:
        """Look up a record type by its config keyword.

        Matching is case-sensitive: the export always writes lowercase
        keywords, anything else is treated as an unknown type.

        Args:
            keyword: First field of a config line.

        Returns:
            Optional[RecordType]: Matching type, or None if not supported.
        """
        for record_type in cls:
            if record_type.value == keyword:
                return record_type
        return None

    @property
    def label(self) -> str:
        """Upper-case name used in error messages (e.g. "MX")."""
        return self.name


# Keywords the export can contain but the engine does not verify yet
NOT_IMPLEMENTED_KEYWORDS = frozenset({"svr", "srv", "caa", "alias", "aaaa"})
