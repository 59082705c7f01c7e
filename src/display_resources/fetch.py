"""Network reads for URL resources."""

from __future__ import annotations

import threading
from types import TracebackType

import httpx
import structlog

from display_resources.duration import to_seconds
from display_resources.exceptions import (
    InvalidResourceError,
    ResourceFetchError,
    ResourceTimeoutError,
)
from display_resources.settings import DEFAULT_USER_AGENT
from display_resources.types import Duration

logger = structlog.get_logger(__name__)


class UrlReader:
    """Reads the full content of a URL with a bounded timeout.

    A reader created with ``trust_self_signed=True`` accepts any
    certificate chain and any hostname for ``https`` URLs. The relaxed
    client is built once, on the first https read, and kept for the life
    of the reader.
    """

    def __init__(
        self,
        timeout: Duration,
        *,
        trust_self_signed: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._timeout = httpx.Timeout(to_seconds(timeout))
        self._trust_self_signed = trust_self_signed
        self._headers = {"User-Agent": user_agent}
        self._client: httpx.Client | None = None
        self._insecure_client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def trusting_anybody(self) -> bool:
        """Whether the relaxed https client has been set up."""
        return self._insecure_client is not None

    def read(self, url: str) -> bytes:
        """Fetch url and return its body.

        Raises:
            ResourceTimeoutError: If the read exceeds the timeout
            ResourceFetchError: On transport errors or a non-success status
            InvalidResourceError: If url is malformed or uses an
                unsupported scheme
        """
        logger.debug("Reading URL", url=url)
        try:
            response = self._client_for(url).get(url)
        except httpx.InvalidURL as e:
            raise InvalidResourceError(url, str(e)) from e
        except httpx.UnsupportedProtocol as e:
            raise InvalidResourceError(url, str(e)) from e
        except httpx.TimeoutException as e:
            raise ResourceTimeoutError(url, reason=str(e) or "timed out") from e
        except httpx.HTTPError as e:
            raise ResourceFetchError(url, reason=str(e)) from e

        if not response.is_success:
            raise ResourceFetchError(
                url, status_code=response.status_code, reason=response.reason_phrase
            )
        return response.content

    def close(self) -> None:
        """Close the underlying HTTP clients."""
        with self._lock:
            clients = [c for c in (self._client, self._insecure_client) if c]
            self._client = None
            self._insecure_client = None
        for client in clients:
            client.close()

    def __enter__(self) -> UrlReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _client_for(self, url: str) -> httpx.Client:
        if url.startswith("https") and self._trust_self_signed:
            return self._trust_anybody()
        with self._lock:
            if self._client is None:
                self._client = self._make_client(verify=True)
            return self._client

    def _trust_anybody(self) -> httpx.Client:
        """Set up the client that skips certificate and hostname checks."""
        with self._lock:
            if self._insecure_client is None:
                logger.warning("Trusting any certificate for https resources")
                self._insecure_client = self._make_client(verify=False)
            return self._insecure_client

    def _make_client(self, *, verify: bool) -> httpx.Client:
        return httpx.Client(
            timeout=self._timeout,
            headers=self._headers,
            follow_redirects=True,
            verify=verify,
        )
