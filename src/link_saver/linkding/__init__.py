"""linkding output: URL normalization, bookmark creation, and the save service."""

from link_saver.linkding.normalize import normalize_url, strip_tracking_params
from link_saver.linkding.repository import BookmarkRepository, bookmarks_endpoint
from link_saver.linkding.service import LinkService, get_link_service, reset_link_service

__all__ = [
    "BookmarkRepository",
    "bookmarks_endpoint",
    "get_link_service",
    "LinkService",
    "normalize_url",
    "reset_link_service",
    "strip_tracking_params",
]
