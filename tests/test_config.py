from __future__ import annotations

import pytest

from fluenthttp import Header, HttpRequest
from fluenthttp.configs import load_config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(
        "debug: true\n"
        "rich_logging: false\n"
        "connect_timeout: 2\n"
        "read_timeout: 4.5\n"
        "allow_redirects: false\n"
        "buffer_size: 1024\n"
        "user_agent: tests/1.0\n",
        encoding="utf-8",
    )
    return str(path)


def test_packaged_defaults(monkeypatch):
    monkeypatch.delenv("FLUENTHTTP_READ_TIMEOUT", raising=False)
    config = load_config()

    assert config.buffer_size == 4096
    assert config.read_timeout == 30.0
    assert config.allow_redirects is True


def test_yaml_values(config_file):
    config = load_config(config_file)

    assert config.debug is True
    assert config.rich_logging is False
    assert config.connect_timeout == 2.0
    assert config.read_timeout == 4.5
    assert config.allow_redirects is False
    assert config.buffer_size == 1024
    assert config.user_agent == "tests/1.0"


def test_environment_overrides_yaml(config_file, monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "9")
    monkeypatch.setenv("FLUENTHTTP_ALLOW_REDIRECTS", "yes")
    monkeypatch.setenv("FLUENTHTTP_BUFFER_SIZE", "not-a-number")

    config = load_config(config_file)

    assert config.read_timeout == 9.0
    assert config.allow_redirects is True
    assert config.buffer_size == 4096


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = load_config(str(tmp_path / "absent.yml"))

    assert config.connect_timeout is None
    assert config.user_agent == "fluenthttp/0.1.0"


def test_http_request_from_config(config_file):
    http = HttpRequest.from_config(config_file)
    target = http.target("https://api.example.test")

    assert target.headers == [Header("User-Agent", "tests/1.0")]
    assert target.request_config.timeout() == (2.0, 4.5)
    assert target.request_config.allow_redirects is False
