# web_delta/renderer/browser.py
"""
Headless Chromium renderer built on the Playwright async API.

One browser, one context and one reusable page per renderer instance. The page
is considered healthy while the browser is connected and the page is open; a
lost session is reported as :class:`RendererUnavailable` and rebuilt by the
next :meth:`BrowserRenderer.start`.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from web_delta.config import RenderSettings
from web_delta.logger import LOGGER_NAME
from web_delta.renderer.base import (
    BaseRenderer,
    RenderedPage,
    RenderError,
    RenderErrorKind,
    RendererSetupError,
    RendererUnavailable,
)

__all__ = ("BrowserRenderer",)

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]
_LINKS_JS = "() => Array.from(document.links).map((link) => link.href)"
_DISCONNECT_MARKERS = ("has been closed", "Target closed", "detached", "Connection closed", "crashed")


def _is_disconnect(exc: Exception) -> bool:
    text = str(exc)
    return any(marker in text for marker in _DISCONNECT_MARKERS)


class BrowserRenderer(BaseRenderer):
    """Renders pages in headless Chromium (JavaScript executed)."""

    def __init__(self, settings: RenderSettings) -> None:
        self.settings = settings
        self.logger = logging.getLogger(LOGGER_NAME)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    def is_healthy(self) -> bool:
        return (
            self._browser is not None
            and self._browser.is_connected()
            and self._page is not None
            and not self._page.is_closed()
        )

    async def start(self) -> None:
        """Launch (or relaunch) the browser and open a fresh page."""
        await self._discard_browser()
        try:
            if self._playwright is None:
                self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.headless, args=_LAUNCH_ARGS
            )
            context = await self._browser.new_context(
                viewport={"width": self.settings.viewport_width, "height": self.settings.viewport_height},
                user_agent=self.settings.user_agent,
            )
            self._page = await context.new_page()
        except PlaywrightError as exc:
            raise RendererSetupError(f"Cannot launch headless browser: {exc}") from exc
        self._mark_started()
        self.logger.debug("Browser session ready (restarts: %d)", self.restarts)

    async def render(self, url: str) -> RenderedPage:
        if not self.is_healthy() or self._page is None:
            raise RendererUnavailable(url)
        page = self._page
        try:
            await page.goto(url, wait_until=self.settings.wait_until, timeout=self.settings.timeout_ms)
            html = await page.content()
            links: List[str] = await page.evaluate(_LINKS_JS)
        except PlaywrightTimeoutError as exc:
            raise RenderError(url, "timeout", str(exc)) from exc
        except PlaywrightError as exc:
            if _is_disconnect(exc) or not self.is_healthy():
                self._page = None
                raise RendererUnavailable(url, str(exc)) from exc
            kind: RenderErrorKind = "network" if "net::" in str(exc) else "navigation"
            raise RenderError(url, kind, str(exc)) from exc
        return RenderedPage(url=url, html=html, links=[link for link in links if isinstance(link, str)])

    async def close(self) -> None:
        await self._discard_browser()
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as exc:
                self.logger.warning("Error stopping Playwright: %s", exc)
            finally:
                self._playwright = None

    async def _discard_browser(self) -> None:
        self._page = None
        if self._browser is None:
            return
        try:
            await self._browser.close()
        except PlaywrightError as exc:
            # a disconnected browser may refuse to close cleanly
            self.logger.debug("Error closing browser: %s", exc)
        finally:
            self._browser = None
