# web_delta/renderer/base.py
"""
Page renderer contract shared by the crawler and the concrete renderers.

A renderer is a reusable session (browser page, HTTP session, ...) that turns a
URL into rendered HTML plus the page's outbound links. The crawler owns the
session lifecycle: it checks :meth:`PageRenderer.is_healthy` before every
render and calls :meth:`PageRenderer.start` to (re)acquire the session lazily.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Protocol, runtime_checkable

__all__ = (
    "RenderedPage",
    "RenderErrorKind",
    "RenderError",
    "RendererUnavailable",
    "RendererSetupError",
    "PageRenderer",
    "BaseRenderer",
)

RenderErrorKind = Literal["timeout", "network", "navigation"]


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """Rendered markup of *url* and the raw outbound link URLs found on it."""

    url: str
    html: str
    links: List[str] = field(default_factory=list)


class RenderError(Exception):
    """Rendering one page failed; the crawl skips the page and goes on."""

    def __init__(self, url: str, kind: RenderErrorKind, message: str = "") -> None:
        self.url = url
        self.kind = kind
        self.message = message
        super().__init__(f"{kind} error for {url}: {message}" if message else f"{kind} error for {url}")


class RendererUnavailable(RenderError):
    """The shared render session broke while rendering *url*."""

    def __init__(self, url: str, message: str = "") -> None:
        super().__init__(url, "navigation", message or "render session lost")


class RendererSetupError(RuntimeError):
    """A render session could not be acquired at all. Fatal for the run."""


@runtime_checkable
class PageRenderer(Protocol):
    async def start(self) -> None: ...

    def is_healthy(self) -> bool: ...

    async def render(self, url: str) -> RenderedPage: ...

    async def close(self) -> None: ...

    async def __aenter__(self) -> "PageRenderer": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...


class BaseRenderer:
    """Async context manager plumbing; the session itself is started lazily."""

    restarts: int = 0
    _started: bool = False

    async def __aenter__(self) -> "BaseRenderer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def is_healthy(self) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    async def render(self, url: str) -> RenderedPage:  # pragma: no cover - abstract
        raise NotImplementedError

    async def close(self) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def _mark_started(self) -> None:
        """Count every start after the first one as a restart."""
        if self._started:
            self.restarts += 1
        self._started = True
