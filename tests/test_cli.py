from __future__ import annotations

import json

import pytest

from stepcalc import cli


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("STEPCALC_HOST", "STEPCALC_PORT", "STEPCALC_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_prints_steps_and_value(capsys):
    assert cli.main(["2+3*4"]) == 0
    out = capsys.readouterr().out
    assert "2+3*4" in out
    assert "symbol" in out
    assert "= 14.0" in out


def test_stages_table(capsys):
    assert cli.main(["1+2", "--stages"]) == 0
    out = capsys.readouterr().out
    for label in ("INIT", "HIGH", "MEDIUM", "LOW"):
        assert label in out


def test_literal_without_operators(capsys):
    assert cli.main(["7"]) == 0
    out = capsys.readouterr().out
    assert "(no operators applied)" in out
    assert "= 7.0" in out


def test_json_output(capsys):
    assert cli.main(["--json", "9?"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["value"] == 3.0
    assert payload["success"] is True


def test_expression_starting_with_sign(capsys):
    assert cli.main(["--", "-5*2"]) == 0
    assert "= -10.0" in capsys.readouterr().out


def test_failure_exit_code(capsys):
    assert cli.main(["1/0"]) == 1
    err = capsys.readouterr().err
    assert "illegal-arithmetic" in err


def test_missing_expression():
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 2


def test_serve_uses_overrides(monkeypatch, tmp_path):
    seen = {}
    monkeypatch.setattr(cli, "serve", lambda config: seen.setdefault("config", config))

    assert cli.main([
        "--serve", "--host", "0.0.0.0", "--port", "8081",
        "--env-file", str(tmp_path / "none.env"),
    ]) == 0
    assert seen["config"].host == "0.0.0.0"
    assert seen["config"].port == 8081


def test_log_level_flag_is_case_insensitive(capsys):
    assert cli.main(["--log-level", "debug", "1+1"]) == 0
    assert "= 2.0" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [
    ["--log-level", "bogus", "1+1"],
    ["--serve", "--port", "0"],
    ["--serve", "--port", "70000"],
])
def test_invalid_overrides_rejected(monkeypatch, argv, capsys):
    monkeypatch.setattr(cli, "serve", lambda config: pytest.fail("serve was called"))

    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    assert exc_info.value.code == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_invalid_log_level_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("STEPCALC_LOG_LEVEL", "verbose")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["1+1"])
    assert exc_info.value.code == 2
    assert "VERBOSE" in capsys.readouterr().err
