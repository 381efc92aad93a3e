"""
bootstrap.py — Startup Sequence

Loads every required secret before the HTTP listener binds. The result says
whether the process is ready to serve; aborting is left to the caller.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from .clients import SecretProvider
from .errors import SecretUnavailable

log = logging.getLogger(__name__)


class StartupStatus(str, enum.Enum):
    READY = "ready"
    FATAL = "fatal"


@dataclass
class StartupResult:
    status: StartupStatus
    secrets: Dict[str, str] = field(default_factory=dict)
    error: Optional[SecretUnavailable] = None

    @property
    def ready(self) -> bool:
        return self.status is StartupStatus.READY


def load_secrets(provider: SecretProvider, names: Iterable[str]) -> StartupResult:
    """
    Fetches all required secrets, stopping at the first failure.

    Args:
        provider (SecretProvider): Memoized secret access.
        names (Iterable[str]): Secret names the application needs.

    Returns:
        StartupResult: READY with the loaded secrets, or FATAL with the error.
    """
    log.info("Cargando secretos...")
    secrets = {}
    for name in names:
        try:
            secrets[name] = provider.get_secret(name)
        except SecretUnavailable as e:
            log.critical(f"No se pudo iniciar: {e}")
            return StartupResult(status=StartupStatus.FATAL, error=e)

    log.info(f"{len(secrets)} secreto(s) cargado(s). Iniciando servidor...")
    return StartupResult(status=StartupStatus.READY, secrets=secrets)
