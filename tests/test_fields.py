from __future__ import annotations

import pytest

from web_delta.parser.fields import (
    FULL_FIELDS,
    REDUCED_FIELDS,
    FieldExtractor,
    FieldRecord,
    extract_fields,
    get_schema,
)

FULL_PAGE = """
<html>
<head>
  <title>
     Acme   Widgets
  </title>
  <meta name="description" content="Best widgets">
  <meta name="keywords" content="widgets, acme">
  <meta name="robots" content="index,follow">
  <link rel="canonical" href="https://acme.example/widgets">
  <meta property="og:title" content="OG Widgets">
  <meta property="og:description" content="OG description">
  <meta property="og:image" content="https://acme.example/w.png">
  <meta name="twitter:card" content="summary">
  <meta name="twitter:title" content="TW Widgets">
  <meta name="twitter:description" content="TW description">
</head>
<body>
  <h1>  Widgets  </h1>
  <h2>First section</h2>
  <h2>Second section</h2>
</body>
</html>
"""


def test_full_schema_extraction():
    record = extract_fields(FULL_PAGE)
    assert record.fields == FULL_FIELDS
    assert record.as_dict() == {
        "title": "Acme Widgets",
        "description": "Best widgets",
        "keywords": "widgets, acme",
        "h1": "Widgets",
        "h2": "First section",
        "canonical": "https://acme.example/widgets",
        "robots": "index,follow",
        "ogTitle": "OG Widgets",
        "ogDescription": "OG description",
        "ogImage": "https://acme.example/w.png",
        "twitterCard": "summary",
        "twitterTitle": "TW Widgets",
        "twitterDescription": "TW description",
    }
    assert not record.extraction_failed


def test_reduced_schema_has_nine_fields():
    record = extract_fields(FULL_PAGE, REDUCED_FIELDS)
    assert record.fields == REDUCED_FIELDS
    assert len(record.values) == 9
    assert "ogImage" not in record.as_dict()
    assert record.as_dict()["ogTitle"] == "OG Widgets"


@pytest.mark.parametrize(
    "html",
    [
        "",
        "<html><body><p>no head at all</p></body></html>",
        "<meta name='description'><h1></h1>",
        "<<<not html>>>",
        "<html><head><title>unclosed",
    ],
)
def test_missing_fields_are_empty_strings(html):
    record = extract_fields(html)
    assert len(record.values) == len(FULL_FIELDS)
    assert all(isinstance(value, str) for value in record.values)
    assert record.as_dict()["description"] == ""
    assert record.as_dict()["canonical"] == ""


def test_first_meta_in_document_order_wins():
    html = (
        '<meta property="description" content="from property">'
        '<meta name="description" content="from name">'
    )
    assert extract_fields(html).as_dict()["description"] == "from property"


def test_canonical_falls_back_to_meta():
    html = '<meta name="canonical" content="https://acme.example/">'
    assert extract_fields(html).as_dict()["canonical"] == "https://acme.example/"


BOTH_CANONICALS = (
    '<link rel="canonical" href="https://new.example/a">'
    '<meta name="canonical" content="/a">'
)


def test_canonical_link_preferred_by_default():
    assert extract_fields(BOTH_CANONICALS).as_dict()["canonical"] == "https://new.example/a"


def test_canonical_meta_only_source():
    record = FieldExtractor(FULL_FIELDS, canonical_source="meta").extract(BOTH_CANONICALS)
    assert record.as_dict()["canonical"] == "/a"
    link_only = FieldExtractor(canonical_source="meta").extract('<link rel="canonical" href="https://x.example/">')
    assert link_only.as_dict()["canonical"] == ""


def test_extraction_is_idempotent():
    assert extract_fields(FULL_PAGE) == extract_fields(FULL_PAGE)


def test_internal_fault_returns_flagged_empty_record(monkeypatch):
    import web_delta.parser.fields as fields_module

    def boom(_soup):
        raise RuntimeError("parser exploded")

    monkeypatch.setitem(fields_module._GETTERS, "h1", boom)
    record = FieldExtractor().extract(FULL_PAGE, "https://acme.example/")
    assert record.extraction_failed
    assert record.values == ("",) * len(FULL_FIELDS)


def test_record_rejects_wrong_arity():
    with pytest.raises(ValueError):
        FieldRecord(fields=("title", "h1"), values=("only one",))


def test_from_mapping_ignores_extra_keys():
    record = FieldRecord.from_mapping(REDUCED_FIELDS, {"title": "T", "bogus": "x"})
    assert record.fields == REDUCED_FIELDS
    assert record.as_dict()["title"] == "T"
    assert record.as_dict()["h2"] == ""


def test_unknown_schema():
    assert get_schema("full") == FULL_FIELDS
    with pytest.raises(ValueError):
        get_schema("tiny")
    with pytest.raises(ValueError):
        FieldExtractor(("title", "favicon"))
