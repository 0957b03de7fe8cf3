# File: web_delta/renderer/__init__.py
"""web_delta.renderer: page renderers and the factory used by the engine."""

from __future__ import annotations

from web_delta.config import RenderSettings
from web_delta.renderer.base import (
    BaseRenderer,
    PageRenderer,
    RenderedPage,
    RenderError,
    RendererSetupError,
    RendererUnavailable,
)


def create_renderer(settings: RenderSettings) -> PageRenderer:
    """Return a fresh, not yet started renderer for *settings.engine*."""
    if settings.engine == "static":
        from web_delta.renderer.static import StaticRenderer

        return StaticRenderer(settings)
    # playwright is imported only when a browser is actually requested
    from web_delta.renderer.browser import BrowserRenderer

    return BrowserRenderer(settings)


__all__ = [
    "BaseRenderer",
    "PageRenderer",
    "RenderedPage",
    "RenderError",
    "RendererSetupError",
    "RendererUnavailable",
    "create_renderer",
]
