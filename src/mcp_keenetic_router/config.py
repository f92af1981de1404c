"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_HOST = "192.168.1.1"
DEFAULT_LOGIN = "admin"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CONNECT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a Keenetic router.

    Attributes:
        host: Router IP address or hostname.
        login: Admin login.
        password: Admin password.
        timeout: Request timeout in seconds.
        connect_timeout: Connection timeout in seconds.
    """

    host: str
    login: str
    password: str
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    @property
    def base_url(self) -> str:
        """Get the router base URL."""
        return f"http://{self.host}"

    def validate(self) -> None:
        """Check that host and credentials are present.

        Raises:
            ConfigurationError: If host, login or password is empty.
        """
        if not self.host:
            raise ConfigurationError("Host is required")
        if not self.login:
            raise ConfigurationError("Login is required")
        if not self.password:
            raise ConfigurationError("Password is required")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Create configuration from environment variables.

        Returns:
            ClientConfig with values from environment.
        """
        return cls(
            host=os.getenv("KEENETIC_HOST", DEFAULT_HOST),
            login=os.getenv("KEENETIC_LOGIN", DEFAULT_LOGIN),
            password=os.getenv("KEENETIC_PASSWORD", ""),
            timeout=_seconds_from_env("KEENETIC_TIMEOUT", DEFAULT_TIMEOUT),
            connect_timeout=_seconds_from_env(
                "KEENETIC_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT
            ),
        )


def _seconds_from_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}")
