"""Line dispatcher: classifies config lines and routes them to matchers."""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional

from dnschecker.models.config_line import ConfigLine
from dnschecker.models.record_type import NOT_IMPLEMENTED_KEYWORDS, RecordType
from dnschecker.models.run_summary import RunSummary
from dnschecker.models.verdict import Verdict, VerdictStatus
from dnschecker.services.logger import log_line_check
from dnschecker.services.matchers import get_matcher
from dnschecker.services.resolver import DNSResolver


logger = logging.getLogger(__name__)

COMMENT_PATTERN = re.compile(r"^#|\s")


class LineKind(Enum):
    """Classification of a config line, first match wins."""

    BLANK = "BLANK"
    COMMENT = "COMMENT"
    WILDCARD = "WILDCARD"
    KNOWN_TYPE = "KNOWN_TYPE"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
    UNKNOWN_TYPE = "UNKNOWN_TYPE"


def classify_line(line: ConfigLine) -> LineKind:
    """Classify a parsed config line.

    Args:
        line: Parsed config line.

    Returns:
        LineKind: Classification deciding how the line is handled.
    """
    if not line.fields:
        return LineKind.BLANK
    if COMMENT_PATTERN.search(line.keyword):
        return LineKind.COMMENT
    if "*" in line.host:
        return LineKind.WILDCARD
    if RecordType.from_keyword(line.keyword) is not None:
        return LineKind.KNOWN_TYPE
    if line.keyword in NOT_IMPLEMENTED_KEYWORDS:
        return LineKind.NOT_IMPLEMENTED
    return LineKind.UNKNOWN_TYPE


def _untested(line: ConfigLine, reason: str) -> Verdict:
    return Verdict(
        line=line.raw,
        status=VerdictStatus.UNTESTED,
        keyword=line.keyword,
        detail=reason,
    )


def check_line(raw: str, domain: str, resolver: DNSResolver) -> Optional[Verdict]:
    """Check a single raw config line.

    Args:
        raw: Line as read from the config.
        domain: Base domain of the check session.
        resolver: Resolution service.

    Returns:
        Optional[Verdict]: Verdict for the line, None for blank and comment lines.
    """
    line = ConfigLine.parse(raw)
    kind = classify_line(line)

    if kind in (LineKind.BLANK, LineKind.COMMENT):
        return None
    if kind == LineKind.WILDCARD:
        return _untested(line, "* (wildcard) used, test manually")
    if kind == LineKind.NOT_IMPLEMENTED:
        return _untested(line, f"{line.keyword} record not yet implemented")
    if kind == LineKind.UNKNOWN_TYPE:
        return _untested(line, line.keyword)

    record_type = RecordType.from_keyword(line.keyword)
    return get_matcher(record_type).evaluate(line, domain, resolver)


def _failed_task_verdict(raw: str, error: Exception) -> Verdict:
    line = ConfigLine.parse(raw)
    record_type = RecordType.from_keyword(line.keyword)
    return Verdict(
        line=line.raw,
        status=VerdictStatus.LOOKUP_FAILED,
        keyword=line.keyword,
        record_type=record_type,
        detail=f"Exception: {error}",
    )


def iter_verdicts(
    lines: Iterable[str],
    domain: str,
    resolver: DNSResolver,
    parallel: bool = False,
    concurrency: int = 10,
) -> Iterator[Verdict]:
    """Yield a verdict for every checkable line.

    In sequential mode verdicts come out in input order and each lookup
    finishes before the next line starts. In parallel mode every line is
    its own task and verdicts are yielded as they complete, in any order.

    Args:
        lines: Raw config lines.
        domain: Base domain of the check session.
        resolver: Resolution service.
        parallel: Run one task per line on a thread pool.
        concurrency: Max worker threads in parallel mode.

    Yields:
        Verdict: One per non-blank, non-comment line.
    """
    if not parallel:
        for raw in lines:
            try:
                verdict = check_line(raw, domain, resolver)
            except Exception as e:
                logger.error(f"Unexpected error checking line {raw!r}: {e}")
                verdict = _failed_task_verdict(raw, e)
            if verdict is not None:
                yield verdict
        return

    pending = [raw for raw in lines if raw.strip()]
    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        futures = {
            executor.submit(check_line, raw, domain, resolver): raw for raw in pending
        }

        for future in as_completed(futures):
            try:
                verdict = future.result()
            except Exception as e:
                # One failing task must not abort its siblings
                raw = futures[future]
                logger.error(f"Unexpected error checking line {raw!r}: {e}")
                verdict = _failed_task_verdict(raw, e)

            if verdict is not None:
                yield verdict


def run_check(
    lines: Iterable[str],
    domain: str,
    resolver: DNSResolver,
    parallel: bool = False,
    concurrency: int = 10,
    on_verdict: Optional[Callable[[Verdict], None]] = None,
) -> RunSummary:
    """Check all lines of one config and fold the verdicts into a summary.

    Args:
        lines: Raw config lines.
        domain: Base domain of the check session.
        resolver: Resolution service.
        parallel: Run lookups concurrently.
        concurrency: Max worker threads in parallel mode.
        on_verdict: Called with each verdict as soon as it is available.

    Returns:
        RunSummary: OK / Error / Untested counts.
    """
    summary = RunSummary()

    for verdict in iter_verdicts(lines, domain, resolver, parallel, concurrency):
        log_line_check(domain, verdict)
        if on_verdict is not None:
            on_verdict(verdict)
        summary = summary.add(verdict)

    return summary
