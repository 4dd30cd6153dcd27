from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from crawlee import ConcurrencySettings
from crawlee.crawlers import (
    BasicCrawlingContext,
    BeautifulSoupCrawler,
    BeautifulSoupCrawlingContext,
    PlaywrightCrawler,
    PlaywrightCrawlingContext,
)
from crawlee.proxy_configuration import ProxyConfiguration

from .browser import PlaywrightPage, settle_page
from .config import config_sha256
from .config_schema import ScraperInput
from .handler import EnqueueFn, HandleResult, PageHandler
from .run_log import RunLogger
from .sink import RecordSink
from .static import SoupPage


@dataclass
class CrawlSummary:
    pages: int = 0
    post_pages: int = 0
    listing_pages: int = 0
    records: int = 0
    links_enqueued: int = 0
    failed_pages: int = 0

    def add(self, result: HandleResult) -> None:
        self.pages += 1
        self.links_enqueued += len(result.links)
        if result.kind == "post":
            self.post_pages += 1
        else:
            self.listing_pages += 1
        if result.record is not None:
            self.records += 1


def _crawler_options(
    config: ScraperInput, proxy_configuration: ProxyConfiguration | None
) -> dict[str, Any]:
    options: dict[str, Any] = {
        "max_requests_per_crawl": config.max_requests_per_crawl,
        "max_request_retries": config.max_request_retries,
        "concurrency_settings": ConcurrencySettings(
            max_concurrency=config.max_concurrency,
            desired_concurrency=min(config.max_concurrency, 10),
        ),
    }
    if proxy_configuration is not None:
        options["proxy_configuration"] = proxy_configuration
    return options


def _enqueue_via(context: BasicCrawlingContext) -> EnqueueFn:
    async def _enqueue(links: Sequence[str]) -> None:
        await context.add_requests(list(links))

    return _enqueue


def build_crawler(
    config: ScraperInput,
    handler: PageHandler,
    summary: CrawlSummary,
    logger: RunLogger,
    *,
    proxy_configuration: ProxyConfiguration | None = None,
) -> BeautifulSoupCrawler | PlaywrightCrawler:
    """
    Wire the page handler into a crawlee crawler for the configured backend.

    Request dispatch, concurrency, retries and the request budget all belong
    to crawlee; this only adapts each crawling context to PageAccess.
    """
    options = _crawler_options(config, proxy_configuration)

    if config.use_browser:
        crawler: BeautifulSoupCrawler | PlaywrightCrawler = PlaywrightCrawler(
            headless=config.headless,
            **options,
        )

        @crawler.router.default_handler
        async def _browser_handler(context: PlaywrightCrawlingContext) -> None:
            url = context.request.loaded_url or context.request.url
            idle = await settle_page(
                context.page,
                network_idle_timeout_ms=config.network_idle_timeout_ms,
                settle_ms=config.settle_ms,
            )
            if not idle:
                logger.debug("network_idle_not_reached", url=url)
            page = PlaywrightPage(
                context.page, url, lookup_timeout_ms=config.lookup_timeout_ms
            )
            summary.add(await handler.handle(page, _enqueue_via(context)))

    else:
        crawler = BeautifulSoupCrawler(**options)

        @crawler.router.default_handler
        async def _static_handler(context: BeautifulSoupCrawlingContext) -> None:
            url = context.request.loaded_url or context.request.url
            page = SoupPage(context.soup, url)
            summary.add(await handler.handle(page, _enqueue_via(context)))

    @crawler.failed_request_handler
    async def _failed(context: BasicCrawlingContext, error: Exception) -> None:
        summary.failed_pages += 1
        logger.error(
            "page_failed",
            url=context.request.url,
            retries=context.request.retry_count,
            error=str(error),
        )

    return crawler


async def run_crawl(
    config: ScraperInput,
    *,
    sink: RecordSink,
    logger: RunLogger,
    proxy_configuration: ProxyConfiguration | None = None,
    export_path: str | Path | None = None,
) -> CrawlSummary:
    """Crawl from the configured start URLs until the request budget or the queue runs out."""
    summary = CrawlSummary()
    handler = PageHandler(sink, logger, backend=config.backend)
    crawler = build_crawler(
        config,
        handler,
        summary,
        logger,
        proxy_configuration=proxy_configuration,
    )

    logger.info(
        "crawl_started",
        backend=config.backend,
        start_urls=list(config.start_urls),
        max_requests_per_crawl=config.max_requests_per_crawl,
        config_sha256=config_sha256(config),
    )

    await crawler.run(list(config.start_urls))

    if export_path is not None:
        await crawler.export_data(str(export_path))
        logger.info("dataset_exported", path=str(export_path))

    logger.info(
        "crawl_completed",
        pages=summary.pages,
        post_pages=summary.post_pages,
        listing_pages=summary.listing_pages,
        records=summary.records,
        failed_pages=summary.failed_pages,
    )
    return summary
