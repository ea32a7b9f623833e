"""URI and query-string helpers for OAuth redirects.

Provider endpoints are picky about encoding: values must be escaped per
RFC 3986, Facebook rejects lowercase hex escapes in ``redirect_uri`` and
Google only hands back whatever was packed into ``state``.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

QueryPairs = Mapping[str, str | None] | Iterable[tuple[str | None, str | None]]


def escape_rfc3986(value: str) -> str:
    """Percent-encode ``value`` per RFC 3986.

    ``quote`` with no safe characters leaves only the RFC 3986 unreserved set
    (``A-Z a-z 0-9 - . _ ~``) untouched, so ``! * ' ( )`` are escaped too,
    unlike RFC 2396 encoders.
    """
    if value is None:
        raise ValueError("value must not be None")
    if not value:
        return value
    return quote(value, safe="")


def _iter_pairs(pairs: QueryPairs) -> Iterable[tuple[str | None, str | None]]:
    if isinstance(pairs, Mapping):
        return pairs.items()
    return pairs


def build_query_string(pairs: QueryPairs) -> str:
    """Join ``key=value`` pairs with ``&``, escaping keys and values.

    Pairs with a ``None`` key are skipped and ``None`` values become empty
    strings. Empty input gives an empty string.
    """
    if pairs is None:
        raise ValueError("pairs must not be None")
    parts = []
    for key, value in _iter_pairs(pairs):
        if key is None:
            continue
        parts.append(f"{escape_rfc3986(key)}={escape_rfc3986(value or '')}")
    return "&".join(parts)


def parse_query_string(query: str | None) -> list[tuple[str, str]]:
    """Decode a query string (or form body) into ordered pairs, keeping blanks."""
    if not query:
        return []
    if query.startswith("?"):
        query = query[1:]
    return parse_qsl(query, keep_blank_values=True)


def get_query(uri: str) -> str:
    """Return the raw query component of ``uri`` without the leading ``?``."""
    return urlsplit(uri).query


def get_left_part_path(uri: str) -> str:
    """Return ``uri`` up to and including its path; query and fragment dropped."""
    parts = urlsplit(uri)
    path = parts.path or ("/" if parts.netloc else "")
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def append_query_args(uri: str, pairs: QueryPairs) -> str:
    """Add ``pairs`` to the query of ``uri``, keeping any existing query first."""
    if uri is None:
        raise ValueError("uri must not be None")
    if not pairs:
        return uri
    extra = build_query_string(pairs)
    if not extra:
        return uri
    parts = urlsplit(uri)
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit(parts._replace(query=query))


def normalize_hex_encoding(url: str) -> str:
    """Uppercase the two hex digits following every ``%`` in ``url``.

    Example:
        ``Login.aspx?ReturnUrl=%2fAccount`` -> ``Login.aspx?ReturnUrl=%2FAccount``
    """
    chars = list(url)
    i = 0
    while i < len(chars) - 2:
        if chars[i] == "%":
            chars[i + 1] = chars[i + 1].upper()
            chars[i + 2] = chars[i + 2].upper()
            i += 2
        i += 1
    return "".join(chars)


def strip_query_args_with_prefix(uri: str, prefix: str) -> str:
    """Remove query arguments whose key starts with ``prefix`` (case-insensitive).

    Returns the very same ``uri`` object when nothing matches, so callers can
    compare identities to detect a no-op.
    """
    if uri is None:
        raise ValueError("uri must not be None")
    if not prefix:
        raise ValueError("prefix must not be empty")

    parts = urlsplit(uri)
    args = parse_query_string(parts.query)
    lowered = prefix.lower()
    kept = [(key, value) for key, value in args if not key.lower().startswith(lowered)]
    if len(kept) == len(args):
        return uri
    return urlunsplit(parts._replace(query=build_query_string(kept)))
