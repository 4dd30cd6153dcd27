from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol, Sequence

from .errors import PageAccessError
from .record import PostRecord, dedupe_texts
from .urls import extract_slug, normalize_post_url, resolve_url


class PageAccess(Protocol):
    """
    Read-only view of a fetched page.

    Lookups return None (or an empty list) when nothing matches. Only a page
    that can no longer be read raises, with PageAccessError.
    """

    @property
    def url(self) -> str: ...

    async def first_text(self, selector: str) -> str | None: ...

    async def first_attr(self, selector: str, name: str) -> str | None: ...

    async def all_texts(self, selector: str) -> list[str]: ...

    async def all_attrs(self, selector: str, name: str) -> list[str]: ...

    async def title(self) -> str | None: ...


Strategy = Callable[[PageAccess], Awaitable[str | None]]
Clock = Callable[[], datetime]

_NON_DIGITS_RE = re.compile(r"\D")


def _digits(text: str | None) -> str:
    return _NON_DIGITS_RE.sub("", text or "")


def text_of(selector: str, *, digits_only: bool = False) -> Strategy:
    async def _strategy(page: PageAccess) -> str | None:
        text = await page.first_text(selector)
        return _digits(text) if digits_only else text

    return _strategy


def attr_of(selector: str, name: str) -> Strategy:
    async def _strategy(page: PageAccess) -> str | None:
        return await page.first_attr(selector, name)

    return _strategy


async def page_title(page: PageAccess) -> str | None:
    return await page.title()


TITLE: tuple[Strategy, ...] = (
    text_of("h1"),
    attr_of('meta[property="og:title"]', "content"),
    page_title,
)
TAGLINE: tuple[Strategy, ...] = (
    text_of("h2, .tagline, .post-headline__tagline"),
    attr_of('meta[name="description"]', "content"),
)
VOTES: tuple[Strategy, ...] = (
    text_of('button[data-test="vote-button"]', digits_only=True),
    text_of("span.vote-count, .votes-count", digits_only=True),
)
COMMENTS: tuple[Strategy, ...] = (
    text_of('a[data-test="comments-link"]', digits_only=True),
    text_of(".comments-count", digits_only=True),
)
PRODUCT_LINK: tuple[Strategy, ...] = (
    attr_of('a[data-test="visit-site-button"]', "href"),
    attr_of('a[href^="http"][rel~="nofollow"]', "href"),
    attr_of('a[data-test*="website"]', "href"),
)
POSTED_AT: tuple[Strategy, ...] = (
    attr_of("time", "datetime"),
    text_of("time"),
)

MAKER_SELECTOR = '[data-test="maker-name"], .maker, .product_maker, a[href*="/@"]'
TOPIC_SELECTOR = 'a[href*="/topics/"], .topic'


async def first_non_empty(page: PageAccess, chain: Sequence[Strategy]) -> str:
    """Run strategies in order and return the first non-blank result, else ""."""
    for strategy in chain:
        try:
            value = await strategy(page)
        except PageAccessError:
            raise
        except Exception:
            # A broken lookup counts as "not found"; the next strategy decides.
            continue
        text = (value or "").strip()
        if text:
            return text
    return ""


async def collect_texts(page: PageAccess, selector: str) -> tuple[str, ...]:
    try:
        texts = await page.all_texts(selector)
    except PageAccessError:
        raise
    except Exception:
        return ()
    return dedupe_texts(texts)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def extract_post(page: PageAccess, *, clock: Clock | None = None) -> PostRecord:
    """
    Build a PostRecord from a post page.

    Missing fields come back as "" (or an empty tuple); the record is always
    produced unless the page itself fails.
    """
    page_url = page.url
    now = clock or _utc_now

    title = await first_non_empty(page, TITLE)
    tagline = await first_non_empty(page, TAGLINE)
    votes = await first_non_empty(page, VOTES)
    comments = await first_non_empty(page, COMMENTS)
    makers = await collect_texts(page, MAKER_SELECTOR)
    topics = await collect_texts(page, TOPIC_SELECTOR)
    product_href = await first_non_empty(page, PRODUCT_LINK)
    posted_at = await first_non_empty(page, POSTED_AT)

    return PostRecord(
        title=title,
        tagline=tagline,
        votes=votes,
        comments=comments,
        makers=makers,
        topics=topics,
        product_url=resolve_url(product_href, page_url),
        ph_url=normalize_post_url(page_url),
        slug=extract_slug(page_url),
        posted_at=posted_at,
        extracted_at=now().isoformat(),
    )
