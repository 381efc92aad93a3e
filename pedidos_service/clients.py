"""
This module provides the client for the one external system the API depends on:
- Secret storage (Google Secret Manager, or environment variables for local runs)
Backends only know how to fetch a value. SecretProvider adds the per-process
cache and turns any backend failure into SecretUnavailable.
"""

import logging
import os
import threading
from typing import Dict, Optional

from google.cloud import secretmanager

from .config import GCP_PROJECT_ID, SECRET_BACKEND
from .errors import SecretUnavailable

log = logging.getLogger(__name__)


# --- Google Secret Manager Backend ---
class GoogleSecretManagerBackend:
    """
    Reads the latest version of a secret from Google Secret Manager.
    The SDK client is created on first use, so missing credentials surface
    as a fetch failure instead of an import-time error.
    """
    def __init__(self, project_id: Optional[str] = GCP_PROJECT_ID):
        self.project_id = project_id
        self._client = None

    def _get_client(self) -> secretmanager.SecretManagerServiceClient:
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def fetch(self, secret_name: str) -> str:
        """
        Fetches the latest version of a secret.
        Args:
            secret_name (str): Secret id inside the project (e.g. 'db_password').
        Returns:
            str: The UTF-8 decoded payload.
        Raises:
            ValueError: If no project id is configured.
            google.api_core.exceptions.GoogleAPIError: If the API call fails.
        """
        if not self.project_id:
            raise ValueError("GCP_PROJECT_ID no está configurado.")
        name = f"projects/{self.project_id}/secrets/{secret_name}/versions/latest"
        response = self._get_client().access_secret_version(request={"name": name})
        return response.payload.data.decode("utf-8")


# --- Environment Backend (local development) ---
class EnvSecretBackend:
    """Reads secrets from SECRET_<NAME> environment variables."""
    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ

    def fetch(self, secret_name: str) -> str:
        key = f"SECRET_{secret_name.upper()}"
        try:
            return self.environ[key]
        except KeyError:
            raise KeyError(f"Variable de entorno {key} no definida") from None


def build_secret_backend(kind: str = SECRET_BACKEND):
    if kind == "gcp":
        return GoogleSecretManagerBackend()
    if kind == "env":
        return EnvSecretBackend()
    raise ValueError(f"SECRET_BACKEND desconocido: {kind}")


# --- Secret Provider (memoized) ---
class SecretProvider:
    """
    Process-wide secret access with memoization.
    The first successful fetch of a name is cached for the lifetime of the
    process; later calls never reach the backend again. Failures are not cached.
    """
    def __init__(self, backend):
        self.backend = backend
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_secret(self, secret_name: str) -> str:
        """
        Returns the value of a secret, fetching it at most once.
        Args:
            secret_name (str): The secret name (e.g. 'db_password').
        Returns:
            str: The secret value.
        Raises:
            SecretUnavailable: If the backend fails to return the secret.
        """
        with self._lock:
            if secret_name in self._cache:
                return self._cache[secret_name]

            try:
                value = self.backend.fetch(secret_name)
            except Exception as e:
                log.error(f"Error al acceder al secreto {secret_name}: {e}")
                raise SecretUnavailable(secret_name, e) from e

            self._cache[secret_name] = value
            log.info(f"Secreto obtenido y guardado en caché: {secret_name}")
            return value
