from __future__ import annotations

import pytest

from smashit import cli
from smashit.loadgen.runner import RunResult
from smashit.metrics import Success, summarize


def test_parse_header_splits_on_first_equals() -> None:
    assert cli.parse_header("Authorization=Bearer a=b") == ("Authorization", "Bearer a=b")
    assert cli.parse_header(" X-Empty = ") == ("X-Empty", "")
    with pytest.raises(ValueError):
        cli.parse_header("no-separator")
    with pytest.raises(ValueError):
        cli.parse_header("=value")


def test_build_config_from_flags() -> None:
    args = cli.build_parser().parse_args(
        ["-u", "http://example.com", "-m", "post", "-c", "7", "-H", "A=1", "-H", "B=2", "-b", "data"]
    )
    config = cli.build_config(args)
    assert config.template.url == "http://example.com"
    assert config.template.method == "post"
    assert config.template.count == 7
    assert config.template.headers == {"A": "1", "B": "2"}
    assert config.template.body == "data"


def test_malformed_header_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-u", "http://example.com", "-H", "oops"])
    assert excinfo.value.code == 2


def test_config_error_returns_status_two() -> None:
    assert cli.main(["-u", "ftp://example.com", "-c", "2"]) == 2


def test_main_prints_report(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    async def fake_run(config):
        outcomes = [Success(200, 10.0)] * config.template.count
        return RunResult(outcomes=outcomes, summary=summarize(outcomes), elapsed_sec=1.0)

    monkeypatch.setattr(cli, "run_load_test", fake_run)
    assert cli.main(["-u", "http://example.com", "-c", "4"]) == 0
    out = capsys.readouterr().out
    assert "Status codes" in out
    assert "200" in out
    assert "p99" in out


def test_every_option_has_help_text() -> None:
    parser = cli.build_parser()
    for action in parser._actions:
        assert action.help, action.dest
