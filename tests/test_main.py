import logging

import pytest

import main
from cms.errors import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in ("DIRECTUS_URL", "DIRECTUS_TOKEN", "DIRECTUS_EMAIL", "DIRECTUS_PASSWORD", "DIRECTUS_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main, "load_dotenv", lambda: None)

    def no_server(*args, **kwargs):
        raise AssertionError("server must not be created")

    monkeypatch.setattr(main, "create_server", no_server)


def _exit_code(caplog):
    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as info:
        main.main()
    return info.value.code


def test_missing_token_exits(caplog):
    assert _exit_code(caplog) == 1
    assert "No authentication method provided" in caplog.text


def test_password_auth_exits(monkeypatch, caplog):
    monkeypatch.setenv("DIRECTUS_EMAIL", "admin@example.com")
    monkeypatch.setenv("DIRECTUS_PASSWORD", "secret")

    assert _exit_code(caplog) == 1
    assert "not implemented" in caplog.text


def test_failed_probe_exits(monkeypatch, caplog):
    monkeypatch.setenv("DIRECTUS_TOKEN", "abc")

    def failing_connect(settings):
        raise ConfigurationError("Failed to authenticate with Directus: Invalid user credentials.")

    monkeypatch.setattr(main, "connect", failing_connect)

    assert _exit_code(caplog) == 1
    assert "Invalid user credentials." in caplog.text


def test_invalid_settings_exit(monkeypatch, caplog):
    monkeypatch.setenv("DIRECTUS_TOKEN", "abc")
    monkeypatch.setenv("DIRECTUS_TIMEOUT", "soon")

    assert _exit_code(caplog) == 1
    assert "DIRECTUS_TIMEOUT" in caplog.text
