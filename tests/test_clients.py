"""Tests for the memoized secret provider and its backends."""

from types import SimpleNamespace

import pytest

from pedidos_service.clients import (
    EnvSecretBackend,
    GoogleSecretManagerBackend,
    SecretProvider,
    build_secret_backend,
)
from pedidos_service.errors import SecretUnavailable


def test_second_call_uses_cache(secret_backend):
    provider = SecretProvider(secret_backend)

    assert provider.get_secret("db_password") == "s3cr3t"
    assert provider.get_secret("db_password") == "s3cr3t"
    assert secret_backend.calls == ["db_password"]


def test_cache_is_per_name(secret_backend):
    secret_backend.values["api_key"] = "abc"
    provider = SecretProvider(secret_backend)

    provider.get_secret("db_password")
    provider.get_secret("api_key")
    provider.get_secret("api_key")
    assert secret_backend.calls == ["db_password", "api_key"]


def test_failure_raises_secret_unavailable(secret_backend):
    secret_backend.missing.add("db_password")
    provider = SecretProvider(secret_backend)

    with pytest.raises(SecretUnavailable) as exc_info:
        provider.get_secret("db_password")
    assert exc_info.value.secret_name == "db_password"
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_failures_are_not_cached(secret_backend):
    secret_backend.missing.add("db_password")
    provider = SecretProvider(secret_backend)
    with pytest.raises(SecretUnavailable):
        provider.get_secret("db_password")

    secret_backend.missing.clear()
    assert provider.get_secret("db_password") == "s3cr3t"
    assert secret_backend.calls == ["db_password", "db_password"]


def test_env_backend_reads_prefixed_variable():
    backend = EnvSecretBackend({"SECRET_DB_PASSWORD": "local"})
    assert backend.fetch("db_password") == "local"


def test_env_backend_missing_variable():
    provider = SecretProvider(EnvSecretBackend({}))
    with pytest.raises(SecretUnavailable):
        provider.get_secret("db_password")


def test_google_backend_requests_latest_version():
    requests = []

    class FakeClient:
        def access_secret_version(self, request):
            requests.append(request)
            return SimpleNamespace(payload=SimpleNamespace(data=b"from-gcp"))

    backend = GoogleSecretManagerBackend(project_id="bakery-prod")
    backend._client = FakeClient()

    assert backend.fetch("db_password") == "from-gcp"
    assert requests == [{"name": "projects/bakery-prod/secrets/db_password/versions/latest"}]


def test_google_backend_without_project():
    provider = SecretProvider(GoogleSecretManagerBackend(project_id=None))
    with pytest.raises(SecretUnavailable):
        provider.get_secret("db_password")


def test_build_secret_backend():
    assert isinstance(build_secret_backend("gcp"), GoogleSecretManagerBackend)
    assert isinstance(build_secret_backend("env"), EnvSecretBackend)
    with pytest.raises(ValueError):
        build_secret_backend("vault")
