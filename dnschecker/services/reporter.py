"""Reporting service for check results.

Renders per-line reports and the run summary to the terminal, and
generates JSON and YAML reports for consumption by other tools.
"""

import json
from datetime import datetime, timezone
from typing import List

import yaml
from rich.console import Console
from rich.text import Text

from dnschecker.models.run_summary import RunSummary
from dnschecker.models.verdict import Verdict, VerdictStatus


STATUS_STYLES = {
    VerdictStatus.MATCHED: "green",
    VerdictStatus.MISMATCHED: "red",
    VerdictStatus.LOOKUP_FAILED: "red",
    VerdictStatus.MALFORMED: "red",
    VerdictStatus.UNTESTED: "yellow",
}

RULE = "-----------------"


class ResultReporter:
    """Formats verdicts and summaries.

    Terminal output goes through a rich Console so that OK, Error and
    Untested lines are colored; machine-readable reports are plain strings.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)

    def print_verdict(self, verdict: Verdict) -> None:
        """Print one line's report block as a single write."""
        text = Text()
        for line in verdict.body_lines():
            text.append(line + "\n")
        style = STATUS_STYLES[verdict.status]
        status_lines = verdict.status_lines()
        text.append(status_lines[0] + "\n", style=style)
        for line in status_lines[1:]:
            text.append(line + "\n")
        self.console.print(text, soft_wrap=True)

    def print_summary(self, summary: RunSummary) -> None:
        """Print the OK / Error / Untested counts."""
        text = Text()
        text.append(f"{RULE}\nSummary\n")
        text.append(f"OK       : {summary.ok}\n", style="green")
        text.append(f"Error    : {summary.error}\n", style="red")
        text.append(f"Untested : {summary.untested}\n", style="yellow")
        text.append(RULE)
        self.console.print(text, soft_wrap=True)

    @staticmethod
    def build_report(
        domain: str, verdicts: List[Verdict], summary: RunSummary
    ) -> dict:
        """Build the serializable report structure.

        Args:
            domain: Base domain of the run.
            verdicts: Verdicts in the order they were produced.
            summary: Final counts.

        Returns:
            dict: Report with domain, generation time, summary and results.
        """
        return {
            "domain": domain,
            "generated_at": datetime.now(timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "summary": summary.to_json(),
            "results": [verdict.to_json() for verdict in verdicts],
        }

    @staticmethod
    def generate_json_report(
        domain: str, verdicts: List[Verdict], summary: RunSummary
    ) -> str:
        """Generate JSON-formatted check report.

        Returns:
            str: Pretty-printed JSON string with sorted keys for determinism.

        Example:
            >>> print(ResultReporter.generate_json_report("example.com", verdicts, summary))
            {
              "domain": "example.com",
              "generated_at": "2026-10-19T10:30:00Z",
              "results": [...],
              "summary": {...}
            }
        """
        report = ResultReporter.build_report(domain, verdicts, summary)
        return json.dumps(report, indent=2, sort_keys=True)

    @staticmethod
    def generate_yaml_report(
        domain: str, verdicts: List[Verdict], summary: RunSummary
    ) -> str:
        """Generate YAML-formatted check report.

        Example:
            >>> print(ResultReporter.generate_yaml_report("example.com", verdicts, summary))
            # dnschecker report for example.com
            domain: example.com
            generated_at: '2026-10-19T10:30:00Z'
            results:
            - detail: ''
              line: a @ 203.0.113.5
              ...
        """
        report = ResultReporter.build_report(domain, verdicts, summary)
        header = f"# dnschecker report for {domain}\n"
        return header + yaml.safe_dump(report, default_flow_style=False, sort_keys=True)
