"""Run-level summary counters."""

from dataclasses import dataclass

from dnschecker.models.verdict import Verdict


@dataclass(frozen=True)
class RunSummary:
    """Counts accumulated over one config file.

    Attributes:
        ok: Lines whose records matched.
        error: Mismatches, lookup failures and malformed lines.
        untested: Wildcard and unsupported lines.

    Invariants:
        - total = ok + error + untested = number of non-blank, non-comment lines
    """

    ok: int = 0
    error: int = 0
    untested: int = 0

    @property
    def total(self) -> int:
        return self.ok + self.error + self.untested

    def add(self, verdict: Verdict) -> "RunSummary":
        """Fold one verdict into a new summary.

        Args:
            verdict: Verdict for a checked line.

        Returns:
            RunSummary: New summary with the matching counter incremented.
        """
        if verdict.is_untested():
            return RunSummary(self.ok, self.error, self.untested + 1)
        if verdict.is_ok():
            return RunSummary(self.ok + 1, self.error, self.untested)
        return RunSummary(self.ok, self.error + 1, self.untested)

    def to_json(self) -> dict:
        return {
            "ok": self.ok,
            "error": self.error,
            "untested": self.untested,
            "total": self.total,
        }
