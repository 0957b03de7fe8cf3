# web_delta/parser/links.py
"""
Link extraction for the static renderer.

Mirrors what a browser exposes as ``document.links``: every ``<a href>`` and
``<area href>`` resolved to an absolute URL, in document order.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("extract_links",)

_SKIP_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Extract absolute HTTP(S) link targets from *html*.

    Honors ``<base href>``. Ignores mailto:, javascript:, tel: and data: links
    and hrefs that do not parse as URLs.
    Scope filtering and deduplication are left to the crawler.
    """
    soup = BeautifulSoup(html, "html.parser")
    base_url = page_url
    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag) and isinstance(base_tag.get("href"), str):
        try:
            base_url = urljoin(page_url, base_tag["href"].strip())
        except ValueError:
            base_url = page_url

    links: List[str] = []
    for tag in soup.find_all(["a", "area"], href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if raw.lower().startswith(_SKIP_SCHEMES):
            continue
        try:
            absolute = urljoin(base_url, raw)
            scheme = urlparse(absolute).scheme
        except ValueError:
            # malformed href, e.g. an unterminated IPv6 host
            continue
        if scheme in ("http", "https"):
            links.append(absolute)
    return links
