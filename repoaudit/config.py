"""
Audit run configuration.

Values come from explicit arguments or from ``REPOAUDIT_*`` environment
variables.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from repoaudit.exceptions import ConfigurationError
from repoaudit.transport import RetryConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid {name}: {raw!r}. Must be a boolean")


def _env_number(env: Mapping[str, str], name: str, default: float, kind: type) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(
            f"Invalid {name}: {raw!r}. Must be a {kind.__name__}"
        ) from None


@dataclass
class AuditConfig:
    """Connection and retry settings for one audit run."""

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_PAGE_SIZE = 100

    host: str
    username: str
    password: str
    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = True
    page_size: int = DEFAULT_PAGE_SIZE
    retry: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigurationError("host must not be empty")
        if "://" not in self.host:
            self.host = f"https://{self.host}"
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.page_size < 1:
            raise ConfigurationError("page_size must be at least 1")

    def __repr__(self) -> str:
        return (
            f"AuditConfig(host={self.host!r}, username={self.username!r}, "
            f"password='[REDACTED]', timeout={self.timeout!r}, "
            f"verify_tls={self.verify_tls!r}, page_size={self.page_size!r}, "
            f"retry={self.retry!r})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AuditConfig":
        """
        Create a configuration from environment variables.

        Environment variables:
            REPOAUDIT_HOST: Registry host or URL (required)
            REPOAUDIT_USER: Account used to read the registry (required)
            REPOAUDIT_PASSWORD: Password or access token (required)
            REPOAUDIT_TIMEOUT: Request timeout in seconds (optional, default: 30)
            REPOAUDIT_INSECURE_SKIP_VERIFY: Disable TLS verification (optional, default: false)
            REPOAUDIT_PAGE_SIZE: Items requested per page (optional, default: 100)
            REPOAUDIT_RETRY_ATTEMPTS: Attempts per request (optional, default: 3)
            REPOAUDIT_RETRY_DELAY: Seconds between attempts (optional, default: 5)

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Configured AuditConfig instance

        Raises:
            ConfigurationError: If required variables are missing or malformed
        """
        env = os.environ if environ is None else environ

        host = env.get("REPOAUDIT_HOST")
        username = env.get("REPOAUDIT_USER")
        password = env.get("REPOAUDIT_PASSWORD")

        if not host:
            raise ConfigurationError("REPOAUDIT_HOST environment variable not set")
        if not username:
            raise ConfigurationError("REPOAUDIT_USER environment variable not set")
        if password is None:
            raise ConfigurationError("REPOAUDIT_PASSWORD environment variable not set")

        defaults = RetryConfig()
        retry = RetryConfig(
            max_attempts=int(
                _env_number(env, "REPOAUDIT_RETRY_ATTEMPTS", defaults.max_attempts, int)
            ),
            delay=_env_number(env, "REPOAUDIT_RETRY_DELAY", defaults.delay, float),
        )

        return cls(
            host=host,
            username=username,
            password=password,
            timeout=_env_number(env, "REPOAUDIT_TIMEOUT", cls.DEFAULT_TIMEOUT, float),
            verify_tls=not _env_bool(env, "REPOAUDIT_INSECURE_SKIP_VERIFY", False),
            page_size=int(
                _env_number(env, "REPOAUDIT_PAGE_SIZE", cls.DEFAULT_PAGE_SIZE, int)
            ),
            retry=retry,
        )
