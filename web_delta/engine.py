# File: web_delta/engine.py
"""web_delta.engine: оркестрация — обход двух сайтов, сопоставление URL, сравнение и агрегация."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, List, Tuple

from web_delta.aggregator import MigrationReport, aggregate
from web_delta.config import CompareConfig, RenderSettings
from web_delta.crawler.crawler import SiteCrawler
from web_delta.crawler.models import CrawlResult
from web_delta.differ import ComparisonResult, compare
from web_delta.logger import logger
from web_delta.parser.fields import FieldExtractor, get_schema
from web_delta.reconciler import Reconciliation, reconcile
from web_delta.renderer import PageRenderer, create_renderer

__all__ = ["ComparisonRun", "Engine", "start_comparison"]

RendererFactory = Callable[[RenderSettings], PageRenderer]


@dataclass(frozen=True, slots=True)
class ComparisonRun:
    """Всё, что нужно для сохранения артефактов: оба обхода и итоговый отчёт."""

    old: CrawlResult
    new: CrawlResult
    report: MigrationReport


class Engine:
    """Фасад для CLI и тестов: обход обоих сайтов и построение MigrationReport."""

    def __init__(self, config: CompareConfig, renderer_factory: RendererFactory = create_renderer) -> None:
        self.config = config
        self.renderer_factory = renderer_factory
        self.schema = get_schema(config.field_schema)
        self.extractor = FieldExtractor(self.schema, config.canonical_source)

    async def crawl_site(self, base_url: str) -> CrawlResult:
        """Обходит один сайт со своим экземпляром рендерера."""
        async with self.renderer_factory(self.config.render) as renderer:
            crawler = SiteCrawler(renderer, self.config.page_budget)
            return await crawler.crawl(base_url)

    async def crawl_both(self) -> Tuple[CrawlResult, CrawlResult]:
        """Обходит старый и новый сайт последовательно или параллельно."""
        if self.config.concurrent_crawls:
            old, new = await asyncio.gather(
                self.crawl_site(self.config.old_url), self.crawl_site(self.config.new_url)
            )
            return old, new
        logger.info("=== Crawling Old Website ===")
        old = await self.crawl_site(self.config.old_url)
        logger.info("=== Crawling New Website ===")
        new = await self.crawl_site(self.config.new_url)
        return old, new

    def compare_pages(
        self, old: CrawlResult, new: CrawlResult, reconciliation: Reconciliation
    ) -> List[ComparisonResult]:
        """Сравнивает поля общих страниц; страницы без снапшота пропускаются."""
        results: List[ComparisonResult] = []
        for old_url, new_url in reconciliation.pairs:
            old_html = old.snapshots.get(old_url)
            new_html = new.snapshots.get(new_url)
            if old_html is None or new_html is None:
                logger.debug("No snapshot to compare for %s -> %s", old_url, new_url)
                continue
            results.append(
                compare(
                    self.extractor.extract(old_html, old_url),
                    self.extractor.extract(new_html, new_url),
                    new_url,
                    flag_failures=self.config.flag_extraction_failures,
                )
            )
        return results

    async def run(self) -> ComparisonRun:
        """Запускает полное сравнение и возвращает ComparisonRun."""
        logger.info("Starting website migration comparison…")
        logger.info("Old Domain: %s", self.config.old_url)
        logger.info("New Domain: %s", self.config.new_url)
        start = time.monotonic()

        old, new = await self.crawl_both()
        reconciliation = reconcile(
            old.urls, self.config.old_url, new.urls, self.config.new_url, self.config.url_matching
        )
        comparisons = self.compare_pages(old, new, reconciliation)
        report = aggregate(
            old,
            new,
            reconciliation,
            comparisons,
            self.schema,
            duration=time.monotonic() - start,
        )
        logger.info(
            "Comparison complete: %d missing, %d new, %d pages with changes",
            report.summary["missingUrls"],
            report.summary["newUrls"],
            report.summary["pagesWithChanges"],
        )
        return ComparisonRun(old=old, new=new, report=report)


async def start_comparison(config: CompareConfig) -> ComparisonRun:
    """Корутина для CLI: Engine(config).run()."""
    return await Engine(config).run()
