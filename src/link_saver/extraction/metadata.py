"""Page metadata fetching: HTML meta tags via trafilatura, oEmbed when advertised."""

import asyncio
import logging
import re
from urllib.parse import urljoin

import httpx
from trafilatura import extract_metadata, load_html

from link_saver.errors import FetchError
from link_saver.models.bookmark import PageMetadata

logger = logging.getLogger(__name__)

USER_AGENT = "link-saver/0.1"

_OEMBED_LINK_XPATH = '//link[@type="application/json+oembed"][@href]'

# <meta charset="..."> and <meta http-equiv="Content-Type" content="...; charset=...">
_META_CHARSET = re.compile(rb"""<meta[^>]+charset\s*=\s*["']?\s*([a-zA-Z0-9_.:-]+)""", re.IGNORECASE)
_META_SNIFF_BYTES = 2048


class PageMetadataFetcher:
    """Fetch a page and derive its title and description.

    One GET per call, no caching. Transport failures raise FetchError; missing
    metadata or an error status does not, the page simply yields empty strings.
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            follow_redirects=True,
            max_redirects=5,
            timeout=self._timeout,
            headers={"User-Agent": USER_AGENT},
            transport=self._transport,
        )

    async def fetch(self, url: str) -> PageMetadata:
        async with self._client() as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                raise FetchError(url, f"Failed to fetch {url}: {exc!r}") from exc

            if response.is_error:
                logger.warning(
                    "Page returned status %d, parsing body anyway: %s",
                    response.status_code,
                    url,
                )

            title, description, oembed_url = await asyncio.to_thread(
                parse_html_metadata, page_body(response), str(response.url)
            )

            if oembed_url:
                oembed = await _fetch_oembed(client, oembed_url)
                title = oembed.get("title") or title
                description = oembed.get("description") or description

        return PageMetadata(url=url, title=title, description=description)


def page_body(response: httpx.Response) -> str | bytes:
    """Return the response body for HTML parsing.

    A charset in the Content-Type header wins, then a <meta> charset near the
    top of the document. Bodies declaring neither are returned as bytes so
    trafilatura can guess the encoding.
    """
    if response.charset_encoding:
        return response.text
    content = response.content
    match = _META_CHARSET.search(content[:_META_SNIFF_BYTES])
    if match:
        try:
            return content.decode(match.group(1).decode("ascii"), errors="replace")
        except LookupError:
            logger.warning("Unknown charset %r declared by page", match.group(1))
    return content


def parse_html_metadata(html: str | bytes, page_url: str) -> tuple[str, str, str | None]:
    """Return ``(title, description, oembed_url)`` parsed from an HTML document.

    The oEmbed URL is the absolute href of the first JSON oEmbed discovery
    link, or None. Unparseable documents yield empty strings.
    """
    if not html:
        return "", "", None
    tree = load_html(html)
    if tree is None:
        return "", "", None

    links = tree.xpath(_OEMBED_LINK_XPATH)
    oembed_url = urljoin(page_url, links[0].get("href")) if links else None

    doc = extract_metadata(tree, default_url=page_url)
    if doc is None:
        return "", "", oembed_url
    return _clean(doc.title), _clean(doc.description), oembed_url


async def _fetch_oembed(client: httpx.AsyncClient, oembed_url: str) -> dict[str, str]:
    """Fetch an oEmbed document. Any failure falls back to an empty result."""
    try:
        response = await client.get(oembed_url)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError):
        logger.warning("oEmbed lookup failed: %s", oembed_url, exc_info=True)
        return {}

    if not isinstance(data, dict):
        return {}
    return {
        key: _clean(data.get(key))
        for key in ("title", "description")
        if isinstance(data.get(key), str)
    }


def _clean(value: str | None) -> str:
    return " ".join(value.split()) if value else ""
