"""HTTP transport for the Keenetic RCI protocol.

Issues requests with the session cookies attached, folds ``Set-Cookie``
headers back into the session and classifies responses into results or
typed errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .auth import AUTH_PATH, Authenticator
from .config import ClientConfig
from .exceptions import ApiError, ConnectionError, NotFoundError, TimeoutError
from .session import Session

# Configure module logger
logger = logging.getLogger(__name__)

USER_AGENT = "mcp-keenetic-router/0.1.0"


@dataclass
class RawResponse:
    """A non-JSON response body passed through untouched.

    Some endpoints answer with plain text (a configuration export, for
    instance). They are returned as this explicit variant instead of
    being treated as errors.
    """

    text: str
    content_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"text": self.text, "content_type": self.content_type}


class Transport:
    """Cookie-aware HTTP transport bound to one session.

    Attributes:
        config: Client configuration.
        session: Session holding cookies and authentication state.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[Session] = None,
        *,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Client configuration.
            session: Session to use; a fresh one is created if omitted.
            http_transport: Optional httpx transport, used to route
                requests somewhere other than the network.
        """
        self.config = config
        self.session = session or Session()
        self._http = httpx.Client(
            timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout),
            transport=http_transport,
        )
        self.authenticator = Authenticator(config, self.session, self.send)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Issue an authenticated GET and return the decoded body."""
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        """Issue an authenticated POST with a JSON body."""
        return self.request("POST", path, body=body)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """Authenticate if needed, send the request and classify the response.

        Returns:
            Decoded JSON, ``None`` for an empty body, or a
            :class:`RawResponse` for a non-JSON body.

        Raises:
            TimeoutError: If the request timed out.
            ConnectionError: If the router could not be reached.
            NotFoundError: For HTTP 404.
            ApiError: For other non-2xx statuses except 401.
        """
        if path != AUTH_PATH:
            self.authenticator.ensure_authenticated()
        response = self.send(method, path, params=params, body=body)
        return self._handle_response(path, response)

    def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> httpx.Response:
        """Send a raw request and fold its cookies into the session.

        No authentication and no status classification happen here.

        Raises:
            TimeoutError: If the request timed out.
            ConnectionError: If no response was received.
        """
        url = f"{self.config.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = self._http.request(
                method,
                url,
                params=params or None,
                json=body,
                headers=self._build_headers(with_body=body is not None),
            )
        except httpx.ConnectTimeout as e:
            raise TimeoutError(
                f"Connection timed out after {self.config.connect_timeout}s"
            ) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request timed out after {self.config.timeout}s") from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Connection failed: {e}") from e

        self.session.update_cookies(response.headers.get_list("set-cookie"))
        # The session jar is the only cookie store.
        self._http.cookies.clear()
        return response

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def _build_headers(self, with_body: bool = False) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "User-Agent": USER_AGENT,
        }
        cookie = self.session.cookie_header()
        if cookie:
            headers["Cookie"] = cookie
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _handle_response(self, path: str, response: httpx.Response) -> Any:
        status = response.status_code

        if status == 404:
            raise NotFoundError(f"Resource not found: {path}")

        # 401 passes through: read-only probes use it to detect session state.
        if not response.is_success and status != 401:
            raise ApiError(
                f"API request failed with status {status}",
                status_code=status,
                response_body=response.text,
            )

        if not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError:
            logger.debug("Non-JSON response from %s passed through as raw text", path)
            return RawResponse(
                text=response.text,
                content_type=response.headers.get("content-type"),
            )
