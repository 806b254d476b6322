from pathlib import Path

import pytest
from typer.testing import CliRunner

from iniscan.cli.app import app
from iniscan.core.errors import ExitCode


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "iniscan" in result.output


def test_dump_plain(runner: CliRunner, example_ini: Path) -> None:
    result = runner.invoke(app, ["dump", str(example_ini), "--plain"])
    assert result.exit_code == ExitCode.OK
    assert result.output.splitlines() == [
        "server.host=localhost",
        "server.port=8080",
        "client.timeout=30",
    ]


def test_dump_section_filter(runner: CliRunner, example_ini: Path) -> None:
    result = runner.invoke(app, ["dump", str(example_ini), "--plain", "-s", "client"])
    assert result.exit_code == ExitCode.OK
    assert result.output.splitlines() == ["client.timeout=30"]


def test_dump_table(runner: CliRunner, example_ini: Path) -> None:
    result = runner.invoke(app, ["dump", str(example_ini)])
    assert result.exit_code == ExitCode.OK
    assert "localhost" in result.output
    assert "timeout" in result.output


def test_dump_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    missing = tmp_path / "missing.ini"

    result = runner.invoke(app, ["dump", str(missing)])
    assert result.exit_code == ExitCode.NOT_FOUND

    result = runner.invoke(app, ["dump", str(missing), "--missing-ok"])
    assert result.exit_code == ExitCode.OK


def test_dump_syntax_error_keeps_earlier_pairs(runner: CliRunner, write_ini) -> None:
    p = write_ini("[s]\na = 1\nbroken\n")
    result = runner.invoke(app, ["dump", str(p), "--plain"])
    assert result.exit_code == ExitCode.SYNTAX
    assert "s.a=1" in result.output
    assert "syntax error" in result.output


def test_dump_directory_fails_without_rendering_pairs(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["dump", str(tmp_path)])
    assert result.exit_code == ExitCode.ERROR
    assert "Cannot open INI source" in result.output
    assert "No key-value pairs" not in result.output


def test_get(runner: CliRunner, example_ini: Path) -> None:
    result = runner.invoke(app, ["get", str(example_ini), "port", "--section", "server"])
    assert result.exit_code == ExitCode.OK
    assert result.output.strip() == "8080"


def test_get_unknown_key(runner: CliRunner, example_ini: Path) -> None:
    result = runner.invoke(app, ["get", str(example_ini), "nope"])
    assert result.exit_code == ExitCode.NOT_FOUND


def test_check_ok(runner: CliRunner, example_ini: Path) -> None:
    result = runner.invoke(app, ["check", str(example_ini)])
    assert result.exit_code == ExitCode.OK
    assert "OK" in result.output


def test_check_reports_syntax_error(runner: CliRunner, write_ini) -> None:
    p = write_ini("[ok]\nx = 1\n[unterminated\n")
    result = runner.invoke(app, ["check", str(p)])
    assert result.exit_code == ExitCode.SYNTAX
    assert "line 3" in result.output
    # reported once by the CLI, not again by the log handler
    assert result.output.count("syntax error") == 1
    assert "parse error at" not in result.output


def test_check_uses_repo_config(runner: CliRunner, tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    (repo / ".iniscan").mkdir(parents=True)
    (repo / ".iniscan" / "config.toml").write_text("[parser]\nmax_line_bytes = 1\n")
    ini = repo / "app.ini"
    ini.write_text("a = 1\n")

    result = runner.invoke(app, ["check", str(ini)])
    assert result.exit_code == ExitCode.ERROR
    assert "invalid iniscan config" in result.output


def test_init_writes_config_once(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert result.exit_code == 0
    cfg = tmp_path / ".iniscan" / "config.toml"
    assert cfg.is_file()
    assert "[parser]" in cfg.read_text()

    result = runner.invoke(app, ["init", str(tmp_path)])
    assert "already exists" in result.output
