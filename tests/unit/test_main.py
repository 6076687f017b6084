"""Unit tests for the command line entry point."""

import json
from unittest.mock import patch

import pytest

from dnschecker.main import (
    ask_for_rerun,
    main,
    perform_dns_check,
    prompt_domain,
    read_pasted_lines,
    run_interactive,
)
from dnschecker.models.run_summary import RunSummary
from dnschecker.services.history import DomainHistory
from dnschecker.services.reporter import ResultReporter


CONFIG_TEXT = """\
# example.com
a @ 203.0.113.5
a * 203.0.113.5
mx @ mail.example.com.
txt @ v=spf1 include:_spf.example.com ~all
a missing 198.51.100.9
"""


def scripted_input(answers):
    """Build an input() replacement that replays answers, then raises EOFError."""
    remaining = list(answers)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return fake_input


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ("DNSCHECK_PARALLEL", "DNSCHECK_REPORT_FORMAT", "DNS_NAMESERVERS", "VERBOSE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DNSCHECK_HISTORY_FILE", str(tmp_path / "history.txt"))


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "dns-example.conf"
    path.write_text(CONFIG_TEXT)
    return path


class TestMain:
    """Test main() argument handling."""

    def test_file_mode(self, config_file, sample_resolver, capsys):
        with patch("dnschecker.main.DNSResolver", return_value=sample_resolver):
            exit_code = main(["example.com", str(config_file)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Config : a @ 203.0.113.5" in out
        assert "Untested : * (wildcard) used, test manually" in out
        assert "OK       : 3" in out
        assert "Error    : 1" in out
        assert "Untested : 1" in out

    def test_file_mode_parallel_json(self, config_file, sample_resolver, capsys):
        with patch("dnschecker.main.DNSResolver", return_value=sample_resolver):
            exit_code = main(["-p", "--format", "json", "example.com", str(config_file)])

        report = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert report["summary"] == {"ok": 3, "error": 1, "untested": 1, "total": 5}
        assert len(report["results"]) == 5

    def test_resolver_built_from_options(self, config_file, sample_resolver):
        with patch(
            "dnschecker.main.DNSResolver", return_value=sample_resolver
        ) as resolver_class:
            main(["--timeout", "2", "--nameserver", "9.9.9.9", "example.com", str(config_file)])

        resolver_class.assert_called_once_with(timeout=2, nameservers=["9.9.9.9"])

    def test_domain_without_file_prints_help(self, capsys):
        assert main(["example.com"]) == 0
        assert "usage" in capsys.readouterr().out

    def test_file_with_legacy_encoded_comment(self, tmp_path, capsys):
        """Test a Shift_JIS comment does not abort the run."""
        path = tmp_path / "dns-sjis.conf"
        path.write_bytes("# テスト設定\na * 203.0.113.5\n".encode("shift_jis"))

        assert main(["example.com", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Untested : * (wildcard) used, test manually" in out
        assert "Untested : 1" in out

    def test_missing_file(self, tmp_path, capsys):
        missing = tmp_path / "nope.conf"

        assert main(["example.com", str(missing)]) == 1
        assert f"File not found : {missing}" in capsys.readouterr().out

    def test_invalid_environment(self, monkeypatch, config_file):
        monkeypatch.setenv("DNS_TIMEOUT", "0")

        assert main(["example.com", str(config_file)]) == 1

    def test_no_arguments_starts_interactive_mode(self):
        with patch("dnschecker.main.run_interactive", return_value=0) as interactive:
            assert main([]) == 0

        interactive.assert_called_once()


class TestInteractive:
    """Test the interactive prompts."""

    def test_prompt_domain_new(self, tmp_path):
        history = DomainHistory(tmp_path / "history.txt")

        assert prompt_domain(history, scripted_input(["example.com"])) == "example.com"

    def test_prompt_domain_by_number(self, tmp_path, capsys):
        history = DomainHistory(tmp_path / "history.txt")
        history.update("example.com")
        history.update("example.org")

        assert prompt_domain(history, scripted_input(["2"])) == "example.org"
        assert "  1: example.com" in capsys.readouterr().out

    def test_prompt_domain_number_out_of_range(self, tmp_path):
        history = DomainHistory(tmp_path / "history.txt")
        history.update("example.com")

        assert prompt_domain(history, scripted_input(["7"])) == "7"

    def test_read_pasted_lines_stops_at_blank(self):
        lines = read_pasted_lines(scripted_input(["a @ 203.0.113.5", "mx @ mail", "", "ignored"]))

        assert lines == ["a @ 203.0.113.5", "mx @ mail"]

    def test_read_pasted_lines_stops_at_eof(self):
        assert read_pasted_lines(scripted_input(["a @ 203.0.113.5"])) == ["a @ 203.0.113.5"]

    @pytest.mark.parametrize(
        "answer, expected",
        [("", True), ("y", True), ("YES", True), ("n", False), ("no", False)],
    )
    def test_ask_for_rerun(self, answer, expected):
        assert ask_for_rerun(scripted_input([answer])) is expected

    def test_run_interactive_single_round(self, base_config, sample_resolver, capsys):
        answers = ["example.com", "a @ 203.0.113.5", "", "n"]

        exit_code = run_interactive(
            base_config, sample_resolver, ResultReporter(), scripted_input(answers)
        )

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "OK       : 1" in out
        assert DomainHistory(base_config.history_file).load() == ["example.com"]

    def test_run_interactive_empty_domain(self, base_config, sample_resolver):
        exit_code = run_interactive(
            base_config, sample_resolver, ResultReporter(), scripted_input([""])
        )

        assert exit_code == 1


def test_perform_dns_check_yaml(base_config, sample_resolver, capsys):
    config = base_config.with_overrides(report_format="yaml")

    summary = perform_dns_check(
        "example.com", ["a @ 203.0.113.5"], config, sample_resolver, ResultReporter()
    )

    assert summary == RunSummary(ok=1, error=0, untested=0)
    assert capsys.readouterr().out.startswith("# dnschecker report for example.com")
