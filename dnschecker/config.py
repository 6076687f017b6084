"""Configuration module for dnschecker.

Loads and validates settings from environment variables. Command line
options override individual values through Config.with_overrides().
"""

import ipaddress
import os
from dataclasses import dataclass, replace
from typing import List


REPORT_FORMATS = ("text", "json", "yaml")


def _env_flag(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    # Lookup Configuration
    parallel: bool
    concurrency: int
    dns_timeout: int
    nameservers: List[str]

    # History Configuration
    history_file: str
    max_history: int

    # Output Configuration
    report_format: str
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If a variable holds an invalid value.

        Returns:
            Config: Validated configuration instance.
        """
        parallel = _env_flag("DNSCHECK_PARALLEL")

        concurrency = int(os.getenv("DNSCHECK_CONCURRENCY", "10"))
        dns_timeout = int(os.getenv("DNS_TIMEOUT", "5"))

        nameservers_str = os.getenv("DNS_NAMESERVERS", "")
        nameservers = [ns.strip() for ns in nameservers_str.split(",") if ns.strip()]

        history_file = os.getenv("DNSCHECK_HISTORY_FILE", "domain_history.txt")
        max_history = int(os.getenv("DNSCHECK_MAX_HISTORY", "8"))

        report_format = os.getenv("DNSCHECK_REPORT_FORMAT", "text").lower()
        verbose = _env_flag("VERBOSE")

        config = cls(
            parallel=parallel,
            concurrency=concurrency,
            dns_timeout=dns_timeout,
            nameservers=nameservers,
            history_file=history_file,
            max_history=max_history,
            report_format=report_format,
            verbose=verbose,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If any setting is out of range.
        """
        if not 1 <= self.concurrency <= 100:
            raise ValueError("DNSCHECK_CONCURRENCY must be between 1 and 100")
        if not 1 <= self.dns_timeout <= 60:
            raise ValueError("DNS_TIMEOUT must be between 1 and 60 seconds")
        if not 1 <= self.max_history <= 100:
            raise ValueError("DNSCHECK_MAX_HISTORY must be between 1 and 100")
        if self.report_format not in REPORT_FORMATS:
            raise ValueError(
                f"DNSCHECK_REPORT_FORMAT must be one of: {', '.join(REPORT_FORMATS)}"
            )
        for nameserver in self.nameservers:
            try:
                ipaddress.ip_address(nameserver)
            except ValueError:
                raise ValueError(
                    f"DNS_NAMESERVERS contains an invalid IP address: {nameserver}"
                ) from None

    def with_overrides(self, **overrides) -> "Config":
        """Return a copy with the given non-None values replaced and validated."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        config = replace(self, **changes)
        config.validate()
        return config
