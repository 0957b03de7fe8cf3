# File: web_delta/aggregator.py
"""web_delta.aggregator: Модуль агрегатора отчёта о миграции сайта."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypedDict

from web_delta.crawler.models import CrawlResult
from web_delta.differ import ComparisonResult
from web_delta.parser.fields import FULL_FIELDS
from web_delta.reconciler import Reconciliation
from web_delta.utils import utc_now_iso


class ReportMetadata(TypedDict, total=False):
    """Сведения о запуске сравнения."""

    timestamp: str
    oldDomain: str
    newDomain: str
    testDuration: str


class ReportSummary(TypedDict):
    """Итоговые счётчики отчёта."""

    oldWebsiteUrls: int
    newWebsiteUrls: int
    missingUrls: int
    newUrls: int
    pagesWithChanges: int
    extractionFailures: int


@dataclass(frozen=True, slots=True)
class MigrationReport:
    """Отчёт о миграции: сводка, списки URL и изменения по страницам."""

    metadata: ReportMetadata
    summary: ReportSummary
    missing_urls: Tuple[str, ...] = ()
    new_urls: Tuple[str, ...] = ()
    page_comparisons: Tuple[ComparisonResult, ...] = ()
    field_impact: Dict[str, int] = field(default_factory=dict)
    extraction_failures: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Структура файла migration_comparison_*.json."""
        return {
            "testInfo": dict(self.metadata),
            "summary": dict(self.summary),
            "missingUrls": list(self.missing_urls),
            "newUrls": list(self.new_urls),
            "pageComparisons": [result.to_dict() for result in self.page_comparisons],
            "seoImpact": dict(self.field_impact),
            "extractionFailures": list(self.extraction_failures),
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _field_impact(comparisons: List[ComparisonResult], schema: Tuple[str, ...]) -> Dict[str, int]:
    """Сколько страниц затронуто изменением каждого поля схемы."""
    impact = {name: 0 for name in schema}
    for result in comparisons:
        for name in set(result.changed_fields()):
            if name in impact:
                impact[name] += 1
    return impact


def aggregate(
    old_crawl: CrawlResult,
    new_crawl: CrawlResult,
    reconciliation: Reconciliation,
    comparisons: Iterable[ComparisonResult],
    schema: Tuple[str, ...] = FULL_FIELDS,
    *,
    timestamp: Optional[datetime] = None,
    duration: Optional[float] = None,
) -> MigrationReport:
    """Собирает все части отчёта в MigrationReport. Ввода-вывода нет."""
    results = list(comparisons)
    changed = [r for r in results if r.has_changes]
    failures = tuple(r.url for r in results if r.extraction_failed)

    metadata: ReportMetadata = {
        "timestamp": utc_now_iso(timestamp),
        "oldDomain": old_crawl.base_url,
        "newDomain": new_crawl.base_url,
    }
    if duration is not None:
        metadata["testDuration"] = f"{int(duration * 1000)}ms"

    summary: ReportSummary = {
        "oldWebsiteUrls": len(old_crawl.urls),
        "newWebsiteUrls": len(new_crawl.urls),
        "missingUrls": len(reconciliation.missing),
        "newUrls": len(reconciliation.new),
        "pagesWithChanges": len(changed),
        "extractionFailures": len(failures),
    }

    return MigrationReport(
        metadata=metadata,
        summary=summary,
        missing_urls=tuple(reconciliation.missing),
        new_urls=tuple(reconciliation.new),
        page_comparisons=tuple(changed),
        field_impact=_field_impact(changed, schema),
        extraction_failures=failures,
    )
