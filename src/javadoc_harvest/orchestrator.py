"""Crawl orchestration: module index -> modules -> packages -> classes.

Each level fans out in an ``asyncio.TaskGroup``. Per-class extraction is the
unit of fault isolation: it always returns a ``ClassOutcome``, turning hard
errors into a counted failure so sibling classes keep going. Failures while
discovering modules or packages are not isolated and abort the whole run
before anything is written: the first such error cancels every sibling task
still in flight. ``ConfigurationError`` is fatal at every level.

All shared state (result list and counters) is mutated from the event loop
thread only, so appends and increments need no further locking.
"""

import asyncio
import json
from collections.abc import Coroutine, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from javadoc_harvest.config import Settings
from javadoc_harvest.errors import ConfigurationError, SoftParseError
from javadoc_harvest.models import TypeDescriptor
from javadoc_harvest.sources.fetcher import Fetcher
from javadoc_harvest.sources.javadoc import (
    class_links,
    module_links,
    package_links,
    parse_type_page,
)


@dataclass(frozen=True)
class ClassOutcome:
    """Result of one per-class extraction unit: a record or an error."""

    url: str
    type: TypeDescriptor | None = None
    error: str | None = None
    issues: tuple[SoftParseError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.type is not None


@dataclass
class CrawlReport:
    types: list[TypeDescriptor] = field(default_factory=list)
    success_count: int = 0
    error_count: int = 0
    failures: dict[str, str] = field(default_factory=dict)
    soft_issue_count: int = 0

    def summary(self) -> str:
        return f"Successes: {self.success_count}, errors: {self.error_count}"


async def _fan_out(coros: Iterable[Coroutine[Any, Any, None]]) -> None:
    """Run *coros* concurrently; the first failure cancels the rest.

    The failure is re-raised as itself rather than as an ``ExceptionGroup``
    so callers keep catching ``FetchError`` and friends directly.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            for coro in coros:
                tg.create_task(coro)
    except BaseExceptionGroup as group:
        raise group.exceptions[0] from None


def write_output(path: Path, types: list[TypeDescriptor]) -> None:
    """Serialize all type records as one JSON array."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [t.to_json_dict() for t in types]
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote {len(data)} types to {path}")


class CrawlOrchestrator:
    """Drive the three-level crawl and aggregate per-class outcomes."""

    def __init__(self, settings: Settings, fetcher: Fetcher):
        self._settings = settings
        self._fetcher = fetcher
        self._report = CrawlReport()

    @property
    def report(self) -> CrawlReport:
        return self._report

    # --- per-class unit ---

    async def extract_type(self, url: str) -> ClassOutcome:
        """Fetch and parse one type page, never raising except for config errors."""
        issues: list[SoftParseError] = []
        try:
            html = await self._fetcher.fetch(url)
            type_ = parse_type_page(html, url, issues)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Error extracting {url}: {e}")
            return ClassOutcome(url=url, error=str(e), issues=tuple(issues))
        return ClassOutcome(url=url, type=type_, issues=tuple(issues))

    def _commit(self, outcome: ClassOutcome) -> None:
        report = self._report
        report.soft_issue_count += len(outcome.issues)
        if outcome.ok:
            report.types.append(outcome.type)
            report.success_count += 1
        else:
            report.failures[outcome.url] = outcome.error or "unknown error"
            report.error_count += 1

    # --- discovery levels ---

    async def _crawl_package(self, package_url: str) -> None:
        html = await self._fetcher.fetch(package_url)
        links = class_links(html, package_url)
        logger.debug(f"{len(links)} classes in {package_url}")

        async def run_class(link: str) -> None:
            self._commit(await self.extract_type(link))

        await _fan_out(run_class(link) for link in links)

    async def _crawl_module(self, module_url: str) -> None:
        html = await self._fetcher.fetch(module_url)
        links = package_links(html, module_url)
        logger.info(f"{len(links)} packages in {module_url}")
        await _fan_out(self._crawl_package(link) for link in links)

    async def discover_modules(self) -> list[str]:
        index_url = self._settings.index_url()
        html = await self._fetcher.fetch(index_url)
        links = module_links(html, index_url, self._settings.root_package_prefix)
        logger.info(f"Found {len(links)} modules under {index_url}")
        return links

    async def run(self, output_path: Path | None = None) -> CrawlReport:
        """Crawl the whole documentation tree and write the output artifact.

        Raises on module/package discovery failures; no output is written
        in that case.
        """
        self._report = CrawlReport()
        modules = await self.discover_modules()
        await _fan_out(self._crawl_module(link) for link in modules)

        report = self._report
        write_output(output_path or self._settings.get_output_path(), report.types)
        if report.soft_issue_count:
            logger.warning(f"{report.soft_issue_count} soft parse errors recorded")
        logger.info(report.summary())
        return report
