"""linkding REST client for bookmark creation.

Only ``POST /api/bookmarks/`` is used. Every failure mode maps to its own
RepositoryError subclass with the underlying exception chained, so the log
line at the top of the pipeline can tell a bad token (401) from an
unreachable host.
"""

import logging

import httpx
from pydantic_core import PydanticSerializationError

from link_saver.errors import (
    PayloadSerializationError,
    RepositoryTransportError,
    RequestBuildError,
    ResponseReadError,
    UnexpectedStatusError,
)
from link_saver.models.bookmark import BookmarkPayload

logger = logging.getLogger(__name__)

APPLICATION_JSON = "application/json"


def bookmarks_endpoint(base_url: str) -> str:
    """Join the bookmarks API path onto a base URL that may carry a path prefix."""
    return f"{base_url.rstrip('/')}/api/bookmarks/"


class BookmarkRepository:
    """Creates bookmarks on a linkding instance with token authentication."""

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = bookmarks_endpoint(base_url)
        self._api_token = api_token
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def create_bookmark(self, payload: BookmarkPayload) -> None:
        """Create a bookmark. Returns only if linkding answered 201 Created.

        Raises:
            PayloadSerializationError: payload could not be encoded.
            RequestBuildError: endpoint URL or headers are invalid.
            RepositoryTransportError: linkding could not be reached.
            ResponseReadError: the response body could not be read.
            UnexpectedStatusError: any status other than 201, including other 2xx.
        """
        try:
            body = payload.model_dump_json()
        except PydanticSerializationError as exc:
            raise PayloadSerializationError(f"Cannot serialize bookmark for {payload.url}") from exc

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                request = client.build_request(
                    "POST",
                    self._endpoint,
                    content=body,
                    headers={
                        "Content-Type": APPLICATION_JSON,
                        "Authorization": f"Token {self._api_token}",
                    },
                )
            except (httpx.InvalidURL, ValueError) as exc:
                raise RequestBuildError(f"Cannot build request to {self._endpoint}") from exc

            try:
                response = await client.send(request, stream=True)
            except httpx.HTTPError as exc:
                raise RepositoryTransportError(f"POST {self._endpoint} failed: {exc!r}") from exc

            try:
                response_body = (await response.aread()).decode("utf-8", errors="replace")
            except httpx.HTTPError as exc:
                raise ResponseReadError(f"Cannot read response from {self._endpoint}") from exc
            finally:
                await response.aclose()

        if response.status_code != httpx.codes.CREATED:
            logger.error(
                "linkding rejected bookmark for %s: %d %s",
                payload.url,
                response.status_code,
                response_body,
                extra={"status_code": response.status_code},
            )
            raise UnexpectedStatusError(response.status_code, response_body)

        logger.info("Bookmark created: %s", payload.url)
