"""Session state shared by every request a client makes."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, Iterable

# Configure module logger
logger = logging.getLogger(__name__)


class AuthState(Enum):
    """Authentication states of a session."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class Session:
    """Cookie jar and authentication state owned by one client.

    The lock serializes the authentication handshake only. Ordinary
    requests update the jar without taking it; the router reissues
    equivalent session cookies, so the last writer wins.
    """

    def __init__(self) -> None:
        """Initialize an empty, unauthenticated session."""
        self.cookies: Dict[str, str] = {}
        self.state = AuthState.UNAUTHENTICATED
        self.lock = threading.Lock()

    @property
    def is_authenticated(self) -> bool:
        """Check if the handshake has completed."""
        return self.state is AuthState.AUTHENTICATED

    def cookie_header(self) -> str:
        """Build the ``Cookie`` header value from the jar."""
        return "; ".join(f"{name}={value}" for name, value in list(self.cookies.items()))

    def update_cookies(self, set_cookie_headers: Iterable[str]) -> None:
        """Fold ``Set-Cookie`` header values into the jar.

        Only the leading ``name=value`` pair of each header is kept;
        attributes such as ``Path`` or ``HttpOnly`` are ignored.

        Args:
            set_cookie_headers: Raw ``Set-Cookie`` header values.
        """
        for header in set_cookie_headers:
            pair = header.split(";", 1)[0]
            name, sep, value = pair.partition("=")
            name = name.strip()
            if not name or not sep:
                continue
            self.cookies[name] = value.strip()
            logger.debug("Stored session cookie %s", name)

    def reset(self) -> None:
        """Forget cookies and require a new handshake."""
        with self.lock:
            self.cookies.clear()
            self.state = AuthState.UNAUTHENTICATED
        logger.debug("Session reset")
