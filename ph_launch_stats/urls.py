from __future__ import annotations

import re
from typing import Iterable, Literal
from urllib.parse import urljoin, urlsplit, urlunsplit

PageKind = Literal["post", "listing"]

POST_PATH_MARKER = "/posts/"

_SLUG_RE = re.compile(r"/posts/([^/]+)")


def _path_of(url: str) -> str:
    try:
        return urlsplit(url).path or ""
    except ValueError:
        # Unparseable: fall back to the raw string.
        return url


def is_post_url(url: str) -> bool:
    return POST_PATH_MARKER in _path_of((url or "").strip())


def classify_url(url: str) -> PageKind:
    """A post page has `/posts/` in its path; everything else is a listing."""
    return "post" if is_post_url(url) else "listing"


def normalize_post_url(url: str) -> str:
    """
    Canonicalize a page URL.

    Scheme and host are lower-cased and an empty path becomes "/". Post URLs
    also lose their query string and fragment so every link to the same post
    shares one address. Anything that does not parse as an absolute URL is
    returned unchanged.
    """
    value = (url or "").strip()
    if not value:
        return url

    try:
        parts = urlsplit(value)
    except ValueError:
        return url

    if not parts.scheme or not parts.netloc:
        return url

    path = parts.path or "/"
    query, fragment = parts.query, parts.fragment
    if POST_PATH_MARKER in path:
        query, fragment = "", ""

    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), path, query, fragment)
    )


def extract_slug(url: str) -> str:
    m = _SLUG_RE.search(_path_of((url or "").strip()))
    return m.group(1) if m else ""


def resolve_url(href: str | None, base: str) -> str:
    """Absolute form of `href` relative to `base`; "" when it cannot be resolved."""
    value = (href or "").strip()
    if not value:
        return ""

    try:
        resolved = urljoin(base, value)
        parts = urlsplit(resolved)
    except ValueError:
        return ""

    if not parts.scheme or not parts.netloc:
        return ""
    return resolved


def _hostname(url: str) -> str:
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def discover_post_links(hrefs: Iterable[str | None], base: str) -> list[str]:
    """
    Post-page links worth enqueueing from a page at `base`.

    Links are resolved, restricted to http(s) on the same hostname as the page,
    filtered to post pages other than the page itself, canonicalized and
    de-duplicated in document order.
    """
    host = _hostname(base)
    own = normalize_post_url(base)
    out: list[str] = []
    seen: set[str] = set()

    for href in hrefs:
        absolute = resolve_url(href, base)
        if not absolute:
            continue
        if urlsplit(absolute).scheme not in ("http", "https"):
            continue
        if host and _hostname(absolute) != host:
            continue
        if not is_post_url(absolute):
            continue

        canonical = normalize_post_url(absolute)
        if canonical == own or canonical in seen:
            continue
        seen.add(canonical)
        out.append(canonical)

    return out
