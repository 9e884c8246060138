"""Link saving service orchestrating normalization, metadata, and persistence.

LinkService.save runs four steps in a fixed order:
1. Normalize the raw URL
2. Fetch page metadata for the normalized URL
3. Build the bookmark payload
4. Create the bookmark on linkding

Each failure is wrapped in a LinkServiceError subclass that names the step,
with the original exception chained as ``__cause__``. Nothing is retried.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from link_saver.config import get_settings
from link_saver.errors import (
    FetchError,
    MetadataFetchError,
    PersistenceError,
    RepositoryError,
)
from link_saver.extraction.metadata import PageMetadataFetcher
from link_saver.linkding.normalize import normalize_url
from link_saver.linkding.repository import BookmarkRepository
from link_saver.models.bookmark import BookmarkPayload, SavedLink, StepTiming

logger = logging.getLogger(__name__)


class LinkService:
    """Saves one URL as a linkding bookmark."""

    def __init__(self, repository: BookmarkRepository, fetcher: PageMetadataFetcher) -> None:
        self.repository = repository
        self.fetcher = fetcher

    async def save(self, raw_url: str) -> SavedLink:
        """Normalize, enrich, and persist ``raw_url``.

        Not idempotent: every call issues a new bookmark creation request.

        Raises:
            NormalizationError: ``raw_url`` is not a well-formed http(s) URL.
            MetadataFetchError: the page could not be fetched.
            PersistenceError: linkding did not create the bookmark.
        """
        timings: list[StepTiming] = []

        with _timed("normalize", timings):
            url = normalize_url(raw_url)

        with _timed("fetch_metadata", timings):
            try:
                metadata = await self.fetcher.fetch(url)
            except FetchError as exc:
                raise MetadataFetchError(f"Metadata fetch failed for {url}") from exc

        payload = BookmarkPayload(
            url=url,
            title=metadata.title,
            description=metadata.description,
        )

        with _timed("persist", timings):
            try:
                await self.repository.create_bookmark(payload)
            except RepositoryError as exc:
                raise PersistenceError(f"Bookmark creation failed for {url}") from exc

        logger.info(
            "Saved %s (%s)",
            url,
            payload.title or "untitled",
            extra={"total_ms": round(sum(t.duration_ms for t in timings), 1)},
        )
        return SavedLink(
            url=url,
            title=payload.title,
            description=payload.description,
            timings=timings,
        )


@contextmanager
def _timed(step: str, timings: list[StepTiming]) -> Iterator[None]:
    """Record the timing of one step whether it succeeds or fails."""
    started_at = datetime.now(timezone.utc)
    outcome = "error"
    try:
        yield
        outcome = "ok"
    finally:
        timing = StepTiming(
            step=step,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        timings.append(timing)
        logger.info(
            "Step %s finished (%s) in %.1fms",
            step,
            outcome,
            timing.duration_ms,
            extra={"step": step, "outcome": outcome, "duration_ms": round(timing.duration_ms, 1)},
        )


_service: LinkService | None = None


def get_link_service() -> LinkService:
    """Return a cached LinkService built from application settings."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = LinkService(
            repository=BookmarkRepository(
                base_url=settings.linkding_base_url,
                api_token=settings.linkding_api_token,
                timeout_seconds=settings.http_timeout_seconds,
            ),
            fetcher=PageMetadataFetcher(timeout_seconds=settings.http_timeout_seconds),
        )
    return _service


def reset_link_service() -> None:
    """Reset the cached service instance. Used for testing."""
    global _service
    _service = None
