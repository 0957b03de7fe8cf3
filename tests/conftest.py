# File: tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Tuple, Union

import pytest

from web_delta.aggregator import aggregate
from web_delta.config import CompareConfig, RenderSettings
from web_delta.crawler.models import CrawlResult
from web_delta.differ import ComparisonResult
from web_delta.engine import ComparisonRun
from web_delta.reconciler import reconcile
from web_delta.renderer.base import BaseRenderer, RenderedPage, RenderError, RendererUnavailable

Script = Dict[str, Union[Tuple[str, List[str]], Exception]]


def page_html(title: str = "", description: str = "", h1: str = "", extra: str = "") -> str:
    """Small HTML document with the given SEO fields."""
    head = f"<title>{title}</title>" if title else ""
    if description:
        head += f'<meta name="description" content="{description}">'
    body = f"<h1>{h1}</h1>" if h1 else ""
    return f"<html><head>{head}</head><body>{body}{extra}</body></html>"


class FakeRenderer(BaseRenderer):
    """
    Renderer with scripted responses.

    *script* maps a URL to ``(html, links)`` or to an exception to raise.
    Unknown URLs raise a ``navigation`` RenderError. A
    :class:`RendererUnavailable` marks the renderer unhealthy, like a crashed
    browser would.
    """

    def __init__(self, script: Script) -> None:
        self.script = script
        self.calls: List[str] = []
        self.starts = 0
        self.closed = False
        self._healthy = False

    def is_healthy(self) -> bool:
        return self._healthy

    async def start(self) -> None:
        self.starts += 1
        self._healthy = True
        self._mark_started()

    async def render(self, url: str) -> RenderedPage:
        if not self._healthy:
            raise RendererUnavailable(url)
        self.calls.append(url)
        entry = self.script.get(url)
        if entry is None:
            raise RenderError(url, "navigation", "no such page")
        if isinstance(entry, Exception):
            if isinstance(entry, RendererUnavailable):
                self._healthy = False
            raise entry
        html, links = entry
        return RenderedPage(url=url, html=html, links=list(links))

    async def close(self) -> None:
        self.closed = True
        self._healthy = False


@pytest.fixture()
def fake_renderer() -> Callable[[Script], FakeRenderer]:
    """Factory fixture: ``fake_renderer({url: (html, links)})``."""
    return FakeRenderer


@pytest.fixture()
def make_config(tmp_path) -> Callable[..., CompareConfig]:
    """Build a CompareConfig that writes into *tmp_path*."""

    def _make(**overrides) -> CompareConfig:
        data = {
            "old_url": "https://old.example/",
            "new_url": "https://new.example/",
            "snapshots_dir": tmp_path / "__snapshots",
            "results_dir": tmp_path / "results",
            "render": RenderSettings(engine="static", timeout_ms=2000),
        }
        data.update(overrides)
        return CompareConfig(**data)

    return _make


@pytest.fixture()
def two_sites() -> Script:
    """Old site {/, /about}, new site {/, /contact}; titles differ on the home page."""
    old, new = "https://old.example/", "https://new.example/"
    return {
        old: (page_html("Home", "Old home"), [old, f"{old}about"]),
        f"{old}about": (page_html("About"), [old]),
        new: (page_html("Welcome", "Old home"), [new, f"{new}contact"]),
        f"{new}contact": (page_html("Contact"), [new]),
    }


def make_run(comparisons=(), failures=()) -> ComparisonRun:
    """ComparisonRun for the D1/D2 scenario built without crawling."""
    d1, d2 = "https://old.example", "https://new.example"
    old = CrawlResult(base_url=d1, urls=(f"{d1}/", f"{d1}/about"), snapshots={f"{d1}/": "<title>Home</title>"})
    new = CrawlResult(base_url=d2, urls=(f"{d2}/", f"{d2}/contact"), snapshots={f"{d2}/": "<title>Welcome</title>"})
    results = list(comparisons) + [ComparisonResult(url=u, extraction_failed=True) for u in failures]
    report = aggregate(
        old,
        new,
        reconcile(old.urls, d1, new.urls, d2),
        results,
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    return ComparisonRun(old=old, new=new, report=report)
