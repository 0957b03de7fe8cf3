# web_delta/crawler/models.py
"""
Data models for the Web Delta crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class PageSnapshot:
    """Rendered markup captured for one URL."""

    url: str
    html: str


@dataclass(slots=True)
class CrawlSession:
    """Mutable state of one site crawl. Lives only inside :meth:`SiteCrawler.crawl`."""

    base_url: str
    max_pages: Optional[int] = None
    # dicts keep insertion order and double as ordered sets
    visited: Dict[str, None] = field(default_factory=dict)
    discovered: Dict[str, None] = field(default_factory=dict)
    snapshots: Dict[str, str] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)

    def in_scope(self, url: str) -> bool:
        return url.startswith(self.base_url)

    def budget_exhausted(self) -> bool:
        return self.max_pages is not None and len(self.visited) >= self.max_pages

    def should_visit(self, url: str) -> bool:
        return url not in self.visited and not self.budget_exhausted() and self.in_scope(url)

    def mark_visited(self, url: str) -> None:
        self.visited[url] = None

    def add_snapshot(self, snapshot: PageSnapshot) -> None:
        self.snapshots[snapshot.url] = snapshot.html

    def discover(self, links: List[str]) -> List[str]:
        """Keep in-scope links, deduplicated in page order, and record them."""
        scoped = [link for link in dict.fromkeys(links) if self.in_scope(link)]
        for link in scoped:
            self.discovered[link] = None
        return scoped

    def result(self) -> CrawlResult:
        return CrawlResult(
            base_url=self.base_url,
            urls=tuple(self.discovered),
            snapshots=dict(self.snapshots),
            visited=tuple(self.visited),
            failed=dict(self.failed),
        )


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Outcome of one site crawl.

    ``urls`` holds every in-scope link discovered on the rendered pages (the
    set reconciled across sites); ``snapshots`` maps each successfully
    rendered URL to its HTML.
    """

    base_url: str
    urls: Tuple[str, ...] = ()
    snapshots: Mapping[str, str] = field(default_factory=dict)
    visited: Tuple[str, ...] = ()
    failed: Mapping[str, str] = field(default_factory=dict)
