"""Recently used domain history."""

import logging
from pathlib import Path
from typing import List


logger = logging.getLogger(__name__)


class DomainHistory:
    """Small newest-last list of domains kept in a text file.

    A missing or unreadable file is an empty history. Write failures are
    logged and otherwise ignored, history never blocks a check.
    """

    def __init__(self, path: str | Path, max_entries: int = 8):
        """Initialize history storage.

        Args:
            path: File holding one domain per line.
            max_entries: Number of domains kept.

        Raises:
            ValueError: If max_entries is less than 1.
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.path = Path(path)
        self.max_entries = max_entries

    def load(self) -> List[str]:
        """Load stored domains, oldest first."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError:
            return []
        return [line.strip() for line in content.splitlines() if line.strip()]

    def save(self, domains: List[str]) -> None:
        """Write domains, keeping only the newest max_entries."""
        domains = domains[-self.max_entries :]
        try:
            self.path.write_text(
                "".join(f"{domain}\n" for domain in domains), encoding="utf-8"
            )
        except OSError as e:
            logger.warning(f"Could not write domain history {self.path}: {e}")

    def update(self, domain: str) -> List[str]:
        """Move a domain to the newest position and persist the list.

        Returns:
            List[str]: Updated history, oldest first.
        """
        domains = [entry for entry in self.load() if entry != domain]
        domains.append(domain)
        domains = domains[-self.max_entries :]
        self.save(domains)
        return domains
