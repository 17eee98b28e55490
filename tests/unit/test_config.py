import pytest

from kvcli.config import DEFAULT_API_BASE_URL
from kvcli.config import get_config
from kvcli.errors import TargetValidationError
from kvcli.settings import load_target
from kvcli.settings import load_user


def test_defaults_from_test_env():
    config = get_config()

    assert config.environment == "test"
    assert config.account_id == "test-account-id"
    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.loki_enabled is False
    assert config.http_timeout_seconds == 60.0


def test_base_url_trailing_slash_is_stripped(monkeypatch):
    monkeypatch.setenv("CF_API_BASE_URL", "https://api.example.com/client/v4/")

    assert get_config().api_base_url == "https://api.example.com/client/v4"


def test_account_id_quotes_are_stripped(monkeypatch):
    monkeypatch.setenv("CF_ACCOUNT_ID", ' "abc123" ')

    assert get_config().account_id == "abc123"


def test_empty_environment_is_rejected(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", " ")

    with pytest.raises(ValueError, match="ENVIRONMENT"):
        get_config()


def test_timeout_conversion(monkeypatch):
    monkeypatch.setenv("KV_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("LOKI_ENABLED", "True")

    config = get_config()
    assert config.http_timeout_seconds == 5.0
    assert config.loki_enabled is True


def test_load_target_parses_bindings(monkeypatch):
    monkeypatch.setenv("KV_NAMESPACES", "CACHE=abc, SESSIONS=def")

    target = load_target(get_config())

    assert target.account_id == "test-account-id"
    assert [(ns.binding, ns.id) for ns in target.kv_namespaces] == [("CACHE", "abc"), ("SESSIONS", "def")]


def test_load_target_rejects_malformed_bindings(monkeypatch):
    monkeypatch.setenv("KV_NAMESPACES", "CACHE")

    with pytest.raises(TargetValidationError, match="KV_NAMESPACES"):
        load_target(get_config())


def test_load_user_prefers_token(monkeypatch):
    monkeypatch.setenv("CF_API_KEY", "global-key")
    monkeypatch.setenv("CF_EMAIL", "ops@example.com")

    user = load_user(get_config())

    assert user.api_token == "test-api-token"
    assert user.api_key is None


def test_load_user_falls_back_to_global_key(monkeypatch):
    monkeypatch.setenv("CF_API_TOKEN", "")
    monkeypatch.setenv("CF_API_KEY", "global-key")
    monkeypatch.setenv("CF_EMAIL", "ops@example.com")

    user = load_user(get_config())

    assert user.api_key == "global-key"
    assert user.email == "ops@example.com"


def test_load_user_without_credentials(monkeypatch):
    monkeypatch.setenv("CF_API_TOKEN", "")
    monkeypatch.delenv("CF_API_KEY", raising=False)
    monkeypatch.delenv("CF_EMAIL", raising=False)

    with pytest.raises(TargetValidationError, match="credentials"):
        load_user(get_config())
