"""Unit tests for configuration validation."""

import pytest

from dnschecker.config import Config


ENV_KEYS = [
    "DNSCHECK_PARALLEL",
    "DNSCHECK_CONCURRENCY",
    "DNS_TIMEOUT",
    "DNS_NAMESERVERS",
    "DNSCHECK_HISTORY_FILE",
    "DNSCHECK_MAX_HISTORY",
    "DNSCHECK_REPORT_FORMAT",
    "VERBOSE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_defaults():
    """Test defaults when no environment variables are set."""
    config = Config.from_env()

    assert config.parallel is False
    assert config.concurrency == 10
    assert config.dns_timeout == 5
    assert config.nameservers == []
    assert config.history_file == "domain_history.txt"
    assert config.max_history == 8
    assert config.report_format == "text"
    assert config.verbose is False


def test_config_from_env_valid(monkeypatch):
    """Test loading values from environment variables."""
    env_vars = {
        "DNSCHECK_PARALLEL": "yes",
        "DNSCHECK_CONCURRENCY": "25",
        "DNS_TIMEOUT": "3",
        "DNS_NAMESERVERS": "1.1.1.1, 8.8.8.8,",
        "DNSCHECK_HISTORY_FILE": "/tmp/history.txt",
        "DNSCHECK_MAX_HISTORY": "4",
        "DNSCHECK_REPORT_FORMAT": "JSON",
        "VERBOSE": "1",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    config = Config.from_env()

    assert config.parallel is True
    assert config.concurrency == 25
    assert config.dns_timeout == 3
    assert config.nameservers == ["1.1.1.1", "8.8.8.8"]
    assert config.history_file == "/tmp/history.txt"
    assert config.max_history == 4
    assert config.report_format == "json"
    assert config.verbose is True


@pytest.mark.parametrize(
    "key, value, message",
    [
        ("DNSCHECK_CONCURRENCY", "0", "DNSCHECK_CONCURRENCY must be between 1 and 100"),
        ("DNSCHECK_CONCURRENCY", "101", "DNSCHECK_CONCURRENCY must be between 1 and 100"),
        ("DNS_TIMEOUT", "61", "DNS_TIMEOUT must be between 1 and 60 seconds"),
        ("DNSCHECK_MAX_HISTORY", "0", "DNSCHECK_MAX_HISTORY must be between 1 and 100"),
        ("DNSCHECK_REPORT_FORMAT", "xml", "DNSCHECK_REPORT_FORMAT must be one of"),
        ("DNS_NAMESERVERS", "1.1.1.1,resolver", "invalid IP address: resolver"),
    ],
)
def test_config_invalid_values(monkeypatch, key, value, message):
    """Test out-of-range values raise ValueError."""
    monkeypatch.setenv(key, value)

    with pytest.raises(ValueError, match=message):
        Config.from_env()


def test_config_non_integer_timeout(monkeypatch):
    monkeypatch.setenv("DNS_TIMEOUT", "soon")

    with pytest.raises(ValueError):
        Config.from_env()


def test_with_overrides_ignores_none():
    """Test unset command line options keep environment values."""
    config = Config.from_env().with_overrides(
        parallel=True, concurrency=None, dns_timeout=None, report_format="yaml"
    )

    assert config.parallel is True
    assert config.concurrency == 10
    assert config.report_format == "yaml"


def test_with_overrides_validates():
    with pytest.raises(ValueError, match="DNS_TIMEOUT"):
        Config.from_env().with_overrides(dns_timeout=0)
