# === FILE: web_delta/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from typing import Iterator, List, Optional

from web_delta.crawler.models import CrawlResult, CrawlSession, PageSnapshot
from web_delta.logger import LOGGER_NAME
from web_delta.renderer.base import PageRenderer, RenderError, RendererUnavailable

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """
    Depth-first, prefix-scoped crawler over a :class:`PageRenderer`.

    Pages are visited in link-discovery order: after rendering a page the
    crawler descends into its first unvisited link before looking at the
    second one. Recursion is replaced by a stack of link iterators, so deep
    sites do not grow the Python call stack.
    """

    def __init__(self, renderer: PageRenderer, max_pages: Optional[int] = None) -> None:
        if max_pages is not None and max_pages < 0:
            raise ValueError("max_pages must be >= 0")
        self.renderer = renderer
        self.max_pages = max_pages
        self.logger = logging.getLogger(LOGGER_NAME)

    async def crawl(self, base_url: str) -> CrawlResult:
        budget = "unbounded" if self.max_pages is None else self.max_pages
        self.logger.info("Crawling site: %s (page budget: %s)", base_url, budget)
        start = time.monotonic()
        session = CrawlSession(base_url=base_url, max_pages=self.max_pages)

        stack: List[Iterator[str]] = []
        if session.should_visit(base_url):
            stack.append(iter(await self._visit(session, base_url)))
        while stack:
            link = next(stack[-1], None)
            if link is None:
                stack.pop()
                continue
            if not session.should_visit(link):
                continue
            stack.append(iter(await self._visit(session, link)))

        duration = time.monotonic() - start
        self.logger.info(
            "Finished %s: %d visited, %d discovered, %d failed in %.2f s",
            base_url,
            len(session.visited),
            len(session.discovered),
            len(session.failed),
            duration,
        )
        return session.result()

    async def _visit(self, session: CrawlSession, url: str) -> List[str]:
        """Render *url* and return its in-scope links; ``[]`` if rendering failed."""
        self.logger.info("Crawling: %s", url)
        session.mark_visited(url)
        await self._ensure_renderer()
        try:
            page = await self.renderer.render(url)
        except RendererUnavailable as exc:
            self.logger.warning("Render session lost on %s, reinitializing before next page: %s", url, exc)
            session.failed[url] = str(exc)
            return []
        except RenderError as exc:
            self.logger.warning("Error crawling %s: %s", url, exc)
            session.failed[url] = str(exc)
            return []
        except Exception as exc:
            self.logger.exception("Unexpected error crawling %s", url)
            session.failed[url] = f"{type(exc).__name__}: {exc}"
            return []

        session.add_snapshot(PageSnapshot(url, page.html))
        links = session.discover(page.links)
        self.logger.debug("%s: %d in-scope links", url, len(links))
        return links

    async def _ensure_renderer(self) -> None:
        # lazy acquire; RendererSetupError propagates and aborts the crawl
        if not self.renderer.is_healthy():
            await self.renderer.start()

