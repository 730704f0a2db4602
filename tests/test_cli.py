from __future__ import annotations

from typer.testing import CliRunner

from fluenthttp.cli.main import app

from .conftest import BASE_URL

runner = CliRunner()


def test_request_prints_status_and_body(requests_mock, monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_RICH_LOGGING", "false")
    requests_mock.get(BASE_URL + "/ping", text="pong", reason="OK", headers={"Content-Type": "text/plain; charset=utf-8"})

    result = runner.invoke(app, ["request", "get", BASE_URL + "/ping", "-H", "X-Id: 7", "-p", "q=1"])

    assert result.exit_code == 0, result.output
    assert "200 OK" in result.output
    assert "pong" in result.output
    sent = requests_mock.last_request
    assert sent.headers["X-Id"] == "7"
    assert sent.qs == {"q": ["1"]}


def test_request_sends_data(requests_mock, monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_RICH_LOGGING", "false")
    requests_mock.post(BASE_URL, status_code=201, text="")

    result = runner.invoke(app, ["request", "POST", BASE_URL, "-d", "hello"])

    assert result.exit_code == 0, result.output
    assert requests_mock.last_request.body == b"hello"


def test_error_status_exits_non_zero(requests_mock, monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_RICH_LOGGING", "false")
    requests_mock.get(BASE_URL, status_code=503, text="down")

    result = runner.invoke(app, ["request", "GET", BASE_URL])

    assert result.exit_code == 1
    assert "down" in result.output


def test_bad_header_is_rejected(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_RICH_LOGGING", "false")

    result = runner.invoke(app, ["request", "GET", BASE_URL, "-H", "no-colon"])

    assert result.exit_code != 0
