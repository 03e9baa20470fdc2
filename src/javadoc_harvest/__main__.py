"""Javadoc harvester entry point."""

import asyncio
import json
import sys

from loguru import logger

from javadoc_harvest.config import Settings


def _configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)


async def _crawl(settings: Settings) -> None:
    """Crawl the whole documentation root and write the output JSON."""
    from javadoc_harvest.orchestrator import CrawlOrchestrator
    from javadoc_harvest.sources.fetcher import Fetcher

    async with Fetcher(settings) as fetcher:
        report = await CrawlOrchestrator(settings, fetcher).run()
    print(report.summary())


async def _page(settings: Settings, url: str) -> int:
    """Extract a single type page and print it as JSON."""
    from javadoc_harvest.orchestrator import CrawlOrchestrator
    from javadoc_harvest.sources.fetcher import Fetcher

    async with Fetcher(settings) as fetcher:
        outcome = await CrawlOrchestrator(settings, fetcher).extract_type(url)

    if not outcome.ok:
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1
    print(json.dumps(outcome.type.to_json_dict(), ensure_ascii=False, indent=2))
    return 0


def _clear_cache(settings: Settings) -> None:
    """Delete the on-disk page cache."""
    from javadoc_harvest.cache import PageCache

    removed = PageCache(settings.get_cache_dir(), settings.docs_root).clear()
    print(f"Removed {removed} cached pages")


def _cli() -> None:
    """CLI dispatcher: crawl (default), page <url>, or clear-cache subcommand."""
    settings = Settings()
    _configure_logging(settings)

    if len(sys.argv) >= 2 and sys.argv[1] == "page":
        if len(sys.argv) < 3:
            print("Usage: javadoc-harvest page <url>", file=sys.stderr)
            sys.exit(2)
        sys.exit(asyncio.run(_page(settings, sys.argv[2])))
    elif len(sys.argv) >= 2 and sys.argv[1] == "clear-cache":
        _clear_cache(settings)
    else:
        asyncio.run(_crawl(settings))


if __name__ == "__main__":
    _cli()
