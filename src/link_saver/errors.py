"""Exception hierarchy for the link saving pipeline.

Each layer wraps the failure of the layer below with ``raise ... from``, so
the chain can be recovered from the outermost exception with ``error_chain``.
"""


class LinkSaverError(Exception):
    """Base class for all pipeline errors."""


class FetchError(LinkSaverError):
    """The target page could not be reached (DNS, refused connection, timeout)."""

    def __init__(self, url: str, message: str = "") -> None:
        self.url = url
        super().__init__(message or f"Failed to fetch {url}")


# -- Bookmark repository --


class RepositoryError(LinkSaverError):
    """Base class for bookmark service failures."""


class PayloadSerializationError(RepositoryError):
    """The bookmark payload could not be encoded as JSON."""


class RequestBuildError(RepositoryError):
    """The HTTP request to the bookmark service could not be constructed."""


class RepositoryTransportError(RepositoryError):
    """The bookmark service could not be reached."""


class ResponseReadError(RepositoryError):
    """The bookmark service response body could not be read."""


class UnexpectedStatusError(RepositoryError):
    """The bookmark service answered with a status other than 201 Created."""

    def __init__(self, status_code: int, response_body: str) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(f"Unexpected status code {status_code}")


# -- Link service --


class LinkServiceError(LinkSaverError):
    """Base class for failures of LinkService.save."""


class NormalizationError(LinkServiceError):
    """The raw URL is not a well-formed http(s) URL."""


class MetadataFetchError(LinkServiceError):
    """Page metadata could not be fetched."""


class PersistenceError(LinkServiceError):
    """The bookmark could not be created."""


def error_chain(exc: BaseException) -> list[BaseException]:
    """Return ``exc`` followed by every exception in its ``__cause__`` chain."""
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__
    return chain


def describe_chain(exc: BaseException) -> str:
    """Render the causal chain as a single line, outermost first."""
    return " <- ".join(f"{type(e).__name__}: {e}" for e in error_chain(exc))
