# web_delta/renderer/static.py
"""
Static renderer: plain HTTP GET over aiohttp, no JavaScript.

Useful for server-rendered sites and for tests. Links are taken from the
returned markup with :func:`web_delta.parser.links.extract_links`.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from web_delta.config import RenderSettings
from web_delta.logger import LOGGER_NAME
from web_delta.parser.links import extract_links
from web_delta.renderer.base import BaseRenderer, RenderedPage, RenderError, RendererUnavailable

__all__ = ("StaticRenderer",)


class StaticRenderer(BaseRenderer):
    """Fetches raw HTML with a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, settings: RenderSettings) -> None:
        self.settings = settings
        self.logger = logging.getLogger(LOGGER_NAME)
        self.session: Optional[ClientSession] = None

    def is_healthy(self) -> bool:
        return self.session is not None and not self.session.closed

    async def start(self) -> None:
        await self.close()
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.settings.timeout_ms / 1000),
            headers={"User-Agent": self.settings.user_agent},
            raise_for_status=False,
        )
        self._mark_started()

    async def render(self, url: str) -> RenderedPage:
        if not self.is_healthy() or self.session is None:
            raise RendererUnavailable(url)
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                ctype = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if ctype and "html" not in ctype:
                    raise RenderError(url, "navigation", f"not an HTML document ({ctype}, HTTP {resp.status})")
                # undecodable bytes become U+FFFD, as in a browser
                html = await resp.text(errors="replace")
                final_url = str(resp.url)
        except asyncio.TimeoutError as exc:
            raise RenderError(url, "timeout", f"no response within {self.settings.timeout_ms} ms") from exc
        except ClientError as exc:
            raise RenderError(url, "network", str(exc)) from exc
        return RenderedPage(url=url, html=html, links=extract_links(html, final_url))

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None
