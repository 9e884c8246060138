"""URL extraction from Telegram messages.

Two sources are combined: URL entities annotated by Telegram in the message
text, and the message's link preview. The result is de-duplicated in
discovery order; the order of the extractors decides which URL comes first.
"""

from collections.abc import Callable, Iterable

from link_saver.models.telegram import URL_ENTITY_TYPES, Message

UrlExtractor = Callable[[Message], list[str]]


def slice_utf16(text: str, offset: int, length: int) -> str:
    """Slice ``text`` by UTF-16 code units, the unit of Telegram entity offsets.

    Characters outside the BMP (most emoji) count as two units, so indexing
    the Python string directly would shift every span after them.
    """
    encoded = text.encode("utf-16-le")
    return encoded[offset * 2 : (offset + length) * 2].decode("utf-16-le", errors="ignore")


def urls_from_entities(message: Message) -> list[str]:
    """Return URLs from ``url`` and ``text_link`` entities.

    ``text_link`` entities carry the target in ``url``; ``url`` entities are
    plain text that Telegram recognized as a link and must be cut out of the
    message text.
    """
    urls = []
    for entity in message.entities:
        if entity.type not in URL_ENTITY_TYPES:
            continue
        url = entity.url or slice_utf16(message.text, entity.offset, entity.length)
        urls.append(url)
    return urls


def urls_from_link_preview(message: Message) -> list[str]:
    """Return the link preview URL unless it is missing, empty, or disabled."""
    preview = message.link_preview_options
    if preview is None or not preview.url or preview.is_disabled:
        return []
    return [preview.url]


def distinct(urls: Iterable[str]) -> list[str]:
    """Drop exact duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(urls))


def combine_extractors(*extractors: UrlExtractor) -> UrlExtractor:
    """Chain extractors: results are concatenated in order, then de-duplicated."""

    def extract(message: Message) -> list[str]:
        urls: list[str] = []
        for extractor in extractors:
            urls.extend(extractor(message))
        return distinct(urls)

    return extract


def build_url_extractor(link_preview_first: bool = False) -> UrlExtractor:
    """Return the extractor for the configured precedence.

    By default entity URLs win over the link preview, so the first link the
    sender typed is the one saved.
    """
    if link_preview_first:
        return combine_extractors(urls_from_link_preview, urls_from_entities)
    return combine_extractors(urls_from_entities, urls_from_link_preview)


extract_urls = build_url_extractor()
