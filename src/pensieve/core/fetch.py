"""HTTP access to schema documents and stylesheets"""

import logging
from typing import Any, Optional

import httpx


logger = logging.getLogger(__name__)

# InvalidURL is raised while building the request and is not an HTTPError.
FETCH_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


class HttpFetcher:
    """Thin httpx.Client wrapper returning decoded JSON or text bodies.

    Non-2xx responses raise httpx.HTTPStatusError; transport problems raise
    the matching httpx.HTTPError subclass and malformed URLs raise
    httpx.InvalidURL. Callers decide what is fatal.
    """

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    def _get(self, url: str) -> httpx.Response:
        logger.debug("GET %s", url)
        resp = self._client.get(url)
        resp.raise_for_status()
        return resp

    def fetch_json(self, url: str) -> Any:
        return self._get(url).json()

    def fetch_text(self, url: str) -> str:
        return self._get(url).text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
