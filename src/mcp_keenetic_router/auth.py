"""Challenge-response authentication for the Keenetic RCI protocol.

The router answers ``GET /auth`` with ``401`` and two headers:
``X-NDM-Challenge`` (a nonce) and ``X-NDM-Realm``. The client proves
knowledge of the password without sending it:

1. ``inner = MD5("{login}:{realm}:{password}")``
2. ``hash = SHA256(challenge + inner)``
3. ``POST /auth`` with ``{"login": login, "password": hash}``

Cookies set by the challenge response must accompany the login POST.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Callable, Optional

import httpx

from .config import ClientConfig
from .exceptions import AuthenticationError, ConnectionError, TimeoutError
from .session import AuthState, Session

# Configure module logger
logger = logging.getLogger(__name__)

AUTH_PATH = "/auth"
CHALLENGE_HEADER = "X-NDM-Challenge"
REALM_HEADER = "X-NDM-Realm"

SendFunc = Callable[..., httpx.Response]


def compute_auth_hash(login: str, realm: str, password: str, challenge: str) -> str:
    """Derive the login hash for a challenge.

    Args:
        login: Admin login.
        realm: Realm announced by the router.
        password: Plain text password.
        challenge: Nonce announced by the router.

    Returns:
        Lower-case hex SHA256 digest.
    """
    inner = hashlib.md5(f"{login}:{realm}:{password}".encode()).hexdigest()
    return hashlib.sha256(f"{challenge}{inner}".encode()).hexdigest()


class Authenticator:
    """Runs the handshake at most once per session.

    Attributes:
        config: Client configuration (host, credentials, timeouts).
        session: Session whose state and cookies the handshake mutates.
    """

    def __init__(self, config: ClientConfig, session: Session, send: SendFunc) -> None:
        """Initialize the authenticator.

        Args:
            config: Client configuration.
            session: Session owned by the client.
            send: Callable issuing a raw request and folding its cookies
                into the session, e.g. ``Transport.send``.
        """
        self.config = config
        self.session = session
        self._send = send

    def ensure_authenticated(self) -> bool:
        """Authenticate unless the session already is.

        Concurrent callers block on the session lock while the first one
        performs the handshake; they then observe the authenticated state
        and return without a second handshake.

        Returns:
            True once the session is authenticated.

        Raises:
            AuthenticationError: If the router rejects the handshake.
            TimeoutError: If a handshake request times out.
            ConnectionError: If the router cannot be reached.
        """
        if self.session.is_authenticated:
            return True

        with self.session.lock:
            if self.session.is_authenticated:
                return True

            self.session.state = AuthState.AUTHENTICATING
            try:
                self._perform_handshake()
            except Exception:
                self.session.state = AuthState.UNAUTHENTICATED
                raise
            self.session.state = AuthState.AUTHENTICATED
            return True

    def _perform_handshake(self) -> None:
        challenge_response = self._request("GET")

        if challenge_response.status_code == 200:
            logger.info("Already authenticated with %s", self.config.host)
            return

        if challenge_response.status_code != 401:
            raise AuthenticationError(
                self._context(f"Unexpected response: HTTP {challenge_response.status_code}")
            )

        challenge = challenge_response.headers.get(CHALLENGE_HEADER)
        realm = challenge_response.headers.get(REALM_HEADER)
        if not challenge or not realm:
            raise AuthenticationError(self._context("Missing challenge headers from router"))

        logger.debug("Got challenge, realm=%s", realm)

        auth_hash = compute_auth_hash(self.config.login, realm, self.config.password, challenge)
        auth_response = self._request(
            "POST", body={"login": self.config.login, "password": auth_hash}
        )

        if auth_response.status_code != 200:
            raise AuthenticationError(
                self._context(f"Authentication failed: HTTP {auth_response.status_code}")
            )
        logger.info("Authentication successful for %s@%s", self.config.login, self.config.host)

    def _request(self, method: str, body: Optional[Any] = None) -> httpx.Response:
        try:
            return self._send(method, AUTH_PATH, body=body)
        except TimeoutError as e:
            raise TimeoutError(
                self._context(f"Authentication timed out after {self.config.timeout}s")
            ) from e
        except ConnectionError as e:
            raise ConnectionError(self._context(str(e))) from e

    def _context(self, message: str) -> str:
        cfg = self.config
        return " | ".join([
            message,
            f"host={cfg.host}",
            f"login={cfg.login}",
            f"timeout={cfg.timeout}s",
            f"connect_timeout={cfg.connect_timeout}s",
        ])
