from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from .errors import PageAccessError
from .extract import Clock, PageAccess, extract_post
from .record import PostRecord
from .run_log import RunLogger
from .sink import RecordSink
from .urls import PageKind, classify_url, discover_post_links

EnqueueFn = Callable[[Sequence[str]], Awaitable[None]]


@dataclass(frozen=True)
class HandleResult:
    url: str
    kind: PageKind
    links: tuple[str, ...]
    record: PostRecord | None = None


class PageHandler:
    """
    Per-page work for the crawl driver: enqueue post links, and on post pages
    extract and emit one record.

    Holds no per-page state, so a single instance serves all concurrent tasks.
    """

    def __init__(
        self,
        sink: RecordSink,
        logger: RunLogger,
        *,
        backend: str = "static",
        clock: Clock | None = None,
    ) -> None:
        self._sink = sink
        self._log = logger
        self._backend = backend
        self._clock = clock

    async def handle(
        self, page: PageAccess, enqueue: EnqueueFn | None = None
    ) -> HandleResult:
        url = page.url
        kind = classify_url(url)
        self._log.info("page_processing", url=url, backend=self._backend, kind=kind)

        try:
            hrefs = await page.all_attrs("a[href]", "href")
            links = tuple(discover_post_links(hrefs, url))
            if links and enqueue is not None:
                await enqueue(links)

            if kind != "post":
                self._log.debug("listing_links_enqueued", url=url, links=len(links))
                return HandleResult(url=url, kind=kind, links=links)

            record = await extract_post(page, clock=self._clock)
        except PageAccessError as e:
            self._log.exception("page_access_failed", exc=e, url=url)
            raise

        await self._sink.emit(record)
        self._log.info("post_saved", url=url, title=record.title)
        return HandleResult(url=url, kind=kind, links=links, record=record)
