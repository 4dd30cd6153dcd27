from __future__ import annotations

import sys

from apify import Actor

from .config import input_from_mapping, resolve_api_token
from .crawl import CrawlSummary, run_crawl
from .run_log import RunLogger
from .sink import DatasetSink


async def run_actor() -> CrawlSummary:
    """
    Apify Actor entry point.

    Reads the Actor input, applies the platform proxy configuration and pushes
    records into the run's default dataset.
    """
    async with Actor:
        config = input_from_mapping(await Actor.get_input())
        logger = RunLogger(stream=sys.stdout)

        if resolve_api_token(config):
            logger.info("api_token_ignored", reason="API-based extraction is not implemented")

        proxy_configuration = await Actor.create_proxy_configuration()
        summary = await run_crawl(
            config,
            sink=DatasetSink(),
            logger=logger,
            proxy_configuration=proxy_configuration,
        )
        await Actor.set_status_message(
            f"Saved {summary.records} posts from {summary.pages} pages"
        )
        return summary
