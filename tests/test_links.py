from __future__ import annotations

from web_delta.parser.links import extract_links

PAGE = "https://site.example/docs/index.html"


def test_relative_links_resolved_in_document_order():
    html = '<a href="a.html">a</a><map><area href="/b"></map><a href="https://other.example/c">c</a>'
    assert extract_links(html, PAGE) == [
        "https://site.example/docs/a.html",
        "https://site.example/b",
        "https://other.example/c",
    ]


def test_base_href_is_honored():
    html = '<base href="https://cdn.example/root/"><a href="x">x</a>'
    assert extract_links(html, PAGE) == ["https://cdn.example/root/x"]


def test_non_http_schemes_skipped():
    html = (
        '<a href="mailto:a@b.c">m</a><a href="javascript:void(0)">j</a>'
        '<a href="tel:123">t</a><a href="ftp://site.example/f">f</a><a href="/ok">ok</a>'
    )
    assert extract_links(html, PAGE) == ["https://site.example/ok"]


def test_malformed_href_skipped():
    html = '<a href="http://[broken/">bad</a><a href="/ok">ok</a>'
    assert extract_links(html, PAGE) == ["https://site.example/ok"]


def test_malformed_base_href_falls_back_to_page_url():
    html = '<base href="http://[broken/"><a href="ok">ok</a>'
    assert extract_links(html, PAGE) == ["https://site.example/docs/ok"]
