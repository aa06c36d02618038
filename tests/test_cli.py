from __future__ import annotations

import pytest

import mcdu.__main__ as cli


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)


def test_parse_command_prints_runs(capsys):
    assert cli.main(["--env-file", "/nonexistent/.env", "parse", "{green}V1{end} {red}100{end}"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["'V1'\t[green]", "' '\t[-]", "'100'\t[red]"]


def test_parse_command_reports_bad_markup(caplog):
    assert cli.main(["--env-file", "/nonexistent/.env", "parse", "x{end}"]) == 1
    assert "parse:" in caplog.text


def test_render_command(sample_message_path, capsys):
    assert cli.main(["--env-file", "/nonexistent/.env", "render", str(sample_message_path)]) == 0
    assert "IRS INIT>" in capsys.readouterr().out


def test_render_missing_file(tmp_path):
    assert cli.main(["--env-file", "/nonexistent/.env", "render", str(tmp_path / "missing.json")]) == 1


def test_serve_overrides():
    args = cli.parse_args(["serve", "--port", "9100", "--overflow", "reject", "--lenient-markup", "--capacity", "4"])
    cfg = cli._apply_overrides(cli.get_runtime_config(refresh=True), args)
    assert cfg.relay.port == 9100
    assert cfg.relay.overflow == "reject"
    assert cfg.relay.queue_capacity == 4
    assert cfg.relay.strict_markup is False
    assert cfg.relay.host == "127.0.0.1"
