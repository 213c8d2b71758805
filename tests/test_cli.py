"""CLI tests — commands that don't need a running server.

Learn: click's CliRunner invokes commands in-process and captures output.
"""

import httpx
import pytest
from click.testing import CliRunner

from prodhub.cli import main as cli_main
from prodhub.config import MIN_SECRET_LENGTH


def test_gen_secret_is_long_enough():
    runner = CliRunner()
    result = runner.invoke(cli_main.main, ["gen-secret"])
    assert result.exit_code == 0
    secret = result.output.strip()
    assert len(secret) >= MIN_SECRET_LENGTH


def test_gen_secret_differs_each_time():
    runner = CliRunner()
    a = runner.invoke(cli_main.main, ["gen-secret"]).output
    b = runner.invoke(cli_main.main, ["gen-secret"]).output
    assert a != b


def test_tasks_requires_token(monkeypatch):
    monkeypatch.delenv("PRODHUB_TOKEN", raising=False)
    result = CliRunner().invoke(cli_main.main, ["tasks"])
    assert result.exit_code == 1
    assert "PRODHUB_TOKEN" in result.output


def test_api_url_from_env(monkeypatch):
    monkeypatch.setenv("PRODHUB_API_URL", "http://example.test:9000/")
    assert cli_main._api_url() == "http://example.test:9000"


def test_data_unwraps_envelope():
    r = httpx.Response(200, json={"success": True, "data": [1, 2]})
    assert cli_main._data(r) == [1, 2]


def test_data_exits_on_error():
    r = httpx.Response(401, json={"success": False, "error": "Invalid email or password"})
    with pytest.raises(SystemExit) as exc:
        cli_main._data(r)
    assert exc.value.code == 1
