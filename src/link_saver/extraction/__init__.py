"""Page metadata extraction.

Public API:
    PageMetadataFetcher(timeout_seconds).fetch(url) -> PageMetadata
"""

from link_saver.extraction.metadata import PageMetadataFetcher, parse_html_metadata

__all__ = [
    "PageMetadataFetcher",
    "parse_html_metadata",
]
