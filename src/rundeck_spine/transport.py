"""HTTP job fetcher.

A thin :class:`~rundeck_spine.core.protocols.JobFetcher` over httpx. It joins
path segments under ``{url}/api/{version}``, sends the auth token, maps
failures onto :class:`TransportError` and strips the ``<result>`` response
envelope so the codec always sees the collection element at the root.
No retries.
"""

from __future__ import annotations

from typing import Mapping, Sequence
from urllib.parse import quote
from xml.etree import ElementTree

import httpx

from rundeck_spine.codec.documents import parse_document
from rundeck_spine.core.errors import (
    AuthenticationError,
    TransportError,
    TransportTimeoutError,
)
from rundeck_spine.core.logging import get_logger
from rundeck_spine.core.settings import RundeckSettings

logger = get_logger(__name__)

AUTH_HEADER = "X-Rundeck-Auth-Token"
ENVELOPE_TAG = "result"


def unwrap_envelope(body: bytes) -> bytes:
    """Return the first child of a ``<result>`` envelope, or ``body`` as-is."""
    root = parse_document(body)
    if root.tag != ENVELOPE_TAG:
        return body
    for element in root:
        element.tail = None
        return ElementTree.tostring(element, encoding="utf-8")
    return body


class HttpJobFetcher:
    """Fetch raw job documents over HTTP."""

    def __init__(self, settings: RundeckSettings, client: httpx.Client | None = None):
        self._settings = settings
        headers = {"Accept": "application/xml"}
        if settings.auth_token is not None:
            headers[AUTH_HEADER] = settings.auth_token.get_secret_value()
        self._client = client or httpx.Client(timeout=settings.timeout)
        self._headers = headers

    def url_for(self, path_segments: Sequence[str]) -> str:
        path = "/".join(quote(segment, safe="") for segment in path_segments)
        return f"{self._settings.api_base}/{path}"

    def fetch(
        self,
        path_segments: Sequence[str],
        query: Mapping[str, str] | None = None,
    ) -> bytes:
        url = self.url_for(path_segments)
        logger.debug("http_fetch", url=url)
        try:
            response = self._client.get(url, params=dict(query or {}), headers=self._headers)
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(f"request to {url} timed out", cause=exc).with_context(url=url)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {url} failed: {exc}", cause=exc).with_context(url=url)

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"service rejected credentials ({response.status_code})"
            ).with_context(url=url, http_status=response.status_code)
        if response.is_error:
            logger.warning("http_fetch_failed", url=url, status=response.status_code)
            raise TransportError(
                f"request to {url} returned HTTP {response.status_code}",
                retryable=response.status_code >= 500,
            ).with_context(url=url, http_status=response.status_code)

        return unwrap_envelope(response.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpJobFetcher:
        return self

    def __exit__(self, *args) -> None:
        self.close()


__all__ = ["HttpJobFetcher", "unwrap_envelope"]
