# tests/test_cli.py

import io
import logging

import pytest

from circmark import cli


def test_renders_argument_to_stdout(capsys):
    assert cli.main(["(R1+R2)"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<svg")
    assert out.endswith("</svg>\n")


def test_reads_stdin_when_no_argument(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("|V1-R1|R2\n"))
    assert cli.main([]) == 0
    assert "<svg" in capsys.readouterr().out


def test_writes_output_file(tmp_path, capsys):
    target = tmp_path / "divider.svg"
    assert cli.main(["-o", str(target), "|V1-R1|R2"]) == 0
    assert target.read_text().startswith("<svg")
    assert capsys.readouterr().out == ""


def test_parse_error_exits_with_report(capsys):
    assert cli.main(["(R1"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Unexpected Token" in captured.err
    assert "Expected '+', '||' or ')', found end of input" in captured.err


def test_bad_config_file(tmp_path, capsys):
    config = tmp_path / "bad.yaml"
    config.write_text("svg:\n  margin: -1\n")
    assert cli.main(["--config", str(config), "R1"]) == 1
    assert "Configuration Error" in capsys.readouterr().err


def test_config_file_is_applied(tmp_path, capsys):
    config = tmp_path / "style.yaml"
    config.write_text("svg:\n  margin: 0\n")
    assert cli.main(["-c", str(config), "R1"]) == 0
    assert 'viewBox="0 0 100 30"' in capsys.readouterr().out


def test_validate_flag(capsys):
    assert cli.main(["--validate", "|(R1||R2)-C1|O"]) == 0


def test_debug_logs_to_stderr(capsys):
    assert cli.main(["--debug", "R1"]) == 0
    captured = capsys.readouterr()
    assert "Rendering circmark document 'R1'" in captured.err
    assert "Rendering" not in captured.out
    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.parametrize("argv", [["--bogus"], ["R1", "R2"]])
def test_usage_errors(argv, capsys):
    assert cli.main(argv) == 2
    assert "circmark-svg: error:" in capsys.readouterr().err


def test_missing_option_value_is_a_usage_error(capsys):
    assert cli.main(["R1", "--output"]) == 2
    assert "expected one argument" in capsys.readouterr().err
