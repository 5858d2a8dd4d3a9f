"""
HTTP transport.

Thin wrapper over httpx that sends one ``OutboundRequest`` and returns an
``HTTPResponse``. Every delivery failure surfaces as ``TransportError``.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import time

import httpx

from minicurl.errors import TransportError
from minicurl.models import HTTPResponse, OutboundRequest

logger = logging.getLogger(__name__)


class HTTPClient:
    """Blocking HTTP client for a single request."""

    def __init__(self, timeout: float = 30.0, verify_ssl: bool = True, max_redirects: int = 10):
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.max_redirects = max_redirects
        self._client: httpx.Client | None = None

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.timeout),
                verify=self.verify_ssl,
                max_redirects=self.max_redirects,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()

    def send(self, req: OutboundRequest) -> HTTPResponse:
        """Send the request and read the full response.

        Redirects are followed only when the request's policy allows it,
        up to this client's ``max_redirects``. Otherwise a 3xx response is
        returned as-is.
        """
        client = self._get_client()

        start_time = time.time()
        try:
            response = client.request(
                method=req.method.value,
                url=req.url,
                headers=[(name.encode("ascii"), value.encode("utf-8")) for name, value in req.headers],
                content=req.body,
                follow_redirects=req.redirects.follow,
            )
        except httpx.TooManyRedirects as e:
            logger.debug(f"Redirect limit of {self.max_redirects} exceeded: {e}")
            raise TransportError(f"Too many redirects: {e}") from e
        except httpx.ConnectError as e:
            logger.debug(f"Connection failed: {e}")
            raise TransportError(f"Connection failed: {e}") from e
        except httpx.TimeoutException as e:
            logger.debug(f"Request timed out after {req.timeout}s")
            raise TransportError(f"Request timed out after {req.timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Transport error: {e}")
            raise TransportError(str(e)) from e

        elapsed_ms = (time.time() - start_time) * 1000
        return HTTPResponse(
            status_code=response.status_code,
            headers=tuple(
                (name.decode("latin-1"), value) for name, value in response.headers.raw
            ),
            body_bytes=response.content,
            reason=response.reason_phrase,
            url=str(response.url),
            http_version=response.http_version,
            elapsed_ms=elapsed_ms,
            redirect_chain=tuple(str(r.url) for r in response.history),
        )


def send_request(req: OutboundRequest) -> HTTPResponse:
    """Send one request with a client scoped to the call."""
    with HTTPClient(
        timeout=req.timeout,
        verify_ssl=req.verify_ssl,
        max_redirects=req.redirects.max_hops,
    ) as client:
        return client.send(req)
