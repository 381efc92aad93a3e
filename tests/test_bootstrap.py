"""Tests for the startup secret loading sequence."""

from pedidos_service.bootstrap import StartupStatus, load_secrets
from pedidos_service.clients import SecretProvider
from pedidos_service.errors import SecretUnavailable


def test_ready_with_all_secrets(secret_backend):
    secret_backend.values["api_key"] = "abc"
    result = load_secrets(SecretProvider(secret_backend), ["db_password", "api_key"])

    assert result.ready
    assert result.status is StartupStatus.READY
    assert result.secrets == {"db_password": "s3cr3t", "api_key": "abc"}
    assert result.error is None


def test_fatal_on_first_missing_secret(secret_backend):
    result = load_secrets(SecretProvider(secret_backend), ["db_password", "api_key", "other"])

    assert not result.ready
    assert result.status is StartupStatus.FATAL
    assert isinstance(result.error, SecretUnavailable)
    assert result.error.secret_name == "api_key"
    assert secret_backend.calls == ["db_password", "api_key"]


def test_no_required_secrets_is_ready(secret_backend):
    result = load_secrets(SecretProvider(secret_backend), [])
    assert result.ready
    assert secret_backend.calls == []
