"""Main entry point for dnschecker.

Checks that the records of a registrar "simple DNS settings" export match
what DNS actually returns.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List

from dnschecker.config import REPORT_FORMATS, Config
from dnschecker.models.run_summary import RunSummary
from dnschecker.models.verdict import Verdict
from dnschecker.services.dispatcher import run_check
from dnschecker.services.history import DomainHistory
from dnschecker.services.logger import log_run_summary, setup_logging
from dnschecker.services.reporter import ResultReporter
from dnschecker.services.resolver import DNSResolver


logger = logging.getLogger(__name__)

USAGE_EPILOG = """\
usage (1): interactive mode, domain and settings are read from the terminal
    dnschecker

usage (2): check a saved settings file
    dnschecker <domain> <file>

example:
    dnschecker my-domain.com dns-mydomain.conf
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnschecker",
        description=(
            "Check that the values of a Value-domain style DNS settings export "
            "match the values returned by DNS lookups"
        ),
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("domain", nargs="?", help="Base domain (e.g. example.com)")
    parser.add_argument("file", nargs="?", help="DNS settings file")
    parser.add_argument(
        "-p",
        "--parallel",
        action="store_true",
        default=None,
        help="Run lookups concurrently (report order is not preserved)",
    )
    parser.add_argument("--concurrency", type=int, help="Worker threads in parallel mode")
    parser.add_argument("--timeout", type=int, help="Lookup timeout in seconds")
    parser.add_argument(
        "--nameserver",
        action="append",
        help="Resolver IP to query instead of the system resolver (repeatable)",
    )
    parser.add_argument("--format", choices=REPORT_FORMATS, help="Report format")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None, help="Log at INFO level"
    )
    return parser


def read_config_file(path: str | Path) -> List[str]:
    """Read config lines from a settings file.

    Exports may carry comments in a legacy encoding (e.g. Shift_JIS), so
    undecodable bytes are replaced instead of failing the run.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read().splitlines()


def perform_dns_check(
    domain: str,
    lines: List[str],
    config: Config,
    resolver: DNSResolver,
    reporter: ResultReporter,
) -> RunSummary:
    """Check every line of one settings export and report the results.

    Args:
        domain: Base domain.
        lines: Raw config lines.
        config: Application configuration.
        resolver: Resolution service.
        reporter: Output formatter.

    Returns:
        RunSummary: Final counts.
    """
    start_time = time.time()
    verdicts: List[Verdict] = []
    text_output = config.report_format == "text"

    def on_verdict(verdict: Verdict) -> None:
        verdicts.append(verdict)
        if text_output:
            reporter.print_verdict(verdict)

    summary = run_check(
        lines,
        domain,
        resolver,
        parallel=config.parallel,
        concurrency=config.concurrency,
        on_verdict=on_verdict,
    )

    if config.report_format == "json":
        print(ResultReporter.generate_json_report(domain, verdicts, summary))
    elif config.report_format == "yaml":
        print(ResultReporter.generate_yaml_report(domain, verdicts, summary), end="")
    else:
        reporter.print_summary(summary)

    log_run_summary(domain, summary, time.time() - start_time)
    return summary


def prompt_domain(history: DomainHistory, input_fn: Callable[[str], str] = input) -> str:
    """Ask for a domain, offering recently used ones by number.

    Returns:
        str: Chosen domain, empty if the user entered nothing.
    """
    recent = history.load()
    if recent:
        print("Recently used domains:")
        for index, domain in enumerate(recent, start=1):
            print(f"  {index}: {domain}")
        answer = input_fn("Choose a number or enter a new domain: ").strip()
    else:
        answer = input_fn("Enter the domain name: ").strip()

    if answer.isdigit() and 1 <= int(answer) <= len(recent):
        return recent[int(answer) - 1]
    return answer


def read_pasted_lines(input_fn: Callable[[str], str] = input) -> List[str]:
    """Collect pasted settings lines until an empty line or end of input."""
    print("Paste the DNS settings (an empty line starts the check):")
    lines = []
    while True:
        try:
            line = input_fn("")
        except EOFError:
            break
        if line == "":
            break
        lines.append(line)
    return lines


def ask_for_rerun(input_fn: Callable[[str], str] = input) -> bool:
    """Ask whether to run another check. Defaults to yes."""
    try:
        answer = input_fn("\nRun again? (Y/n): ").strip().lower()
    except EOFError:
        return False
    return answer in ("", "y", "yes")


def run_interactive(
    config: Config,
    resolver: DNSResolver,
    reporter: ResultReporter,
    input_fn: Callable[[str], str] = input,
) -> int:
    """Interactive loop: domain prompt, pasted settings, check, rerun.

    Returns:
        int: Exit code (1 if no domain was entered).
    """
    history = DomainHistory(config.history_file, config.max_history)

    while True:
        try:
            domain = prompt_domain(history, input_fn)
        except EOFError:
            domain = ""
        if not domain:
            print("The domain is empty")
            return 1

        history.update(domain)
        lines = read_pasted_lines(input_fn)
        perform_dns_check(domain, lines, config, resolver, reporter)

        if not ask_for_rerun(input_fn):
            return 0


def main(argv: List[str] | None = None) -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 for success, 1 for fatal error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env().with_overrides(
            parallel=args.parallel,
            concurrency=args.concurrency,
            dns_timeout=args.timeout,
            nameservers=args.nameserver,
            report_format=args.format,
            verbose=args.verbose,
        )
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(config.verbose)
    logger.info("Starting dnschecker")

    resolver = DNSResolver(timeout=config.dns_timeout, nameservers=config.nameservers)
    reporter = ResultReporter()

    if args.domain is None:
        return run_interactive(config, resolver, reporter)

    if args.file is None:
        parser.print_help()
        return 0

    if not Path(args.file).is_file():
        print(f"File not found : {args.file}")
        parser.print_help()
        return 1

    try:
        lines = read_config_file(args.file)
    except OSError as e:
        logger.error(f"Error when opening file {args.file}: {e}", exc_info=True)
        return 1

    perform_dns_check(args.domain, lines, config, resolver, reporter)
    return 0


if __name__ == "__main__":
    sys.exit(main())
