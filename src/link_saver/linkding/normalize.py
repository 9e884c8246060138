"""URL normalization before a link is fetched and stored.

Strips utm_* tracking parameters, then applies RFC 3986 normalization via
the url-normalize library (scheme and host lowercasing, default port
removal, percent-encoding, IDNA hosts, dot-segment removal). A missing
scheme defaults to https.
"""

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from url_normalize import url_normalize

from link_saver.errors import NormalizationError

_ALLOWED_SCHEMES = ("http", "https")
_LABEL_PATTERN = re.compile(r"^[a-z0-9_]([a-z0-9_-]*[a-z0-9_])?$")


def strip_tracking_params(raw_url: str) -> str:
    """Remove utm_* query parameters, leaving the query untouched otherwise."""
    parsed = urlsplit(raw_url)
    params = parse_qsl(parsed.query, keep_blank_values=True)
    filtered = [(k, v) for k, v in params if not k.lower().startswith("utm_")]
    if len(filtered) == len(params):
        return raw_url
    return urlunsplit(parsed._replace(query=urlencode(filtered)))


def normalize_url(raw_url: str) -> str:
    """Return the canonical form of ``raw_url``.

    Raises NormalizationError if the string is empty, contains whitespace,
    or does not resolve to an http(s) URL with a valid host.
    """
    candidate = raw_url.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        raise NormalizationError(f"Not a well-formed URL: {raw_url!r}")

    try:
        # url-normalize collapses empty labels ("ex..com"), so check the raw host first
        raw_host = urlsplit(candidate if "://" in candidate else "//" + candidate).hostname
        if raw_host and not _valid_host(raw_host, label_pattern=None):
            raise NormalizationError(f"Invalid host in URL: {raw_url!r}")
        normalized = url_normalize(strip_tracking_params(candidate))
        parsed = urlsplit(normalized)
        hostname = parsed.hostname or ""
        parsed.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise NormalizationError(f"Not a well-formed URL: {raw_url!r}") from exc

    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise NormalizationError(f"Unsupported URL scheme {parsed.scheme!r}: {raw_url!r}")
    if not _valid_host(hostname, label_pattern=_LABEL_PATTERN):
        raise NormalizationError(f"Invalid host in URL: {raw_url!r}")
    return normalized


def _valid_host(hostname: str, label_pattern: re.Pattern[str] | None) -> bool:
    """True for IPv6 literals and for names whose labels are all non-empty.

    With ``label_pattern`` each label must also match it. A single trailing
    dot (fully qualified name) is allowed.
    """
    if ":" in hostname:
        return True
    labels = hostname.removesuffix(".").split(".")
    if not all(labels):
        return False
    return label_pattern is None or all(label_pattern.match(label) for label in labels)
