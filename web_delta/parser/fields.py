# === FILE: web_delta/parser/fields.py ===
"""SEO field extraction.

:func:`extract_fields` turns rendered HTML into a :class:`FieldRecord`: a fixed,
ordered set of string fields. Two schemas exist:

* ``full`` — 13 fields, including Open Graph image and Twitter Card tags.
* ``reduced`` — the first 9 fields only.

Extraction is total. A missing tag or attribute gives ``""``; an unexpected
parser fault gives an all-empty record flagged with ``extraction_failed`` so the
differ can report the page as a failure instead of a content change.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Mapping, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from web_delta.logger import logger

__all__: Sequence[str] = (
    "FULL_FIELDS",
    "REDUCED_FIELDS",
    "SCHEMAS",
    "FieldRecord",
    "CanonicalSource",
    "FieldExtractor",
    "extract_fields",
    "get_schema",
)

FULL_FIELDS: Tuple[str, ...] = (
    "title",
    "description",
    "keywords",
    "h1",
    "h2",
    "canonical",
    "robots",
    "ogTitle",
    "ogDescription",
    "ogImage",
    "twitterCard",
    "twitterTitle",
    "twitterDescription",
)
REDUCED_FIELDS: Tuple[str, ...] = FULL_FIELDS[:9]

SCHEMAS: Dict[str, Tuple[str, ...]] = {"full": FULL_FIELDS, "reduced": REDUCED_FIELDS}


def get_schema(name: str) -> Tuple[str, ...]:
    try:
        return SCHEMAS[name]
    except KeyError:
        raise ValueError(f"Unknown field schema {name!r}; expected one of {sorted(SCHEMAS)}") from None


@dataclass(frozen=True, slots=True)
class FieldRecord:
    """Values of every schema field, in schema order."""

    fields: Tuple[str, ...]
    values: Tuple[str, ...]
    extraction_failed: bool = False

    def __post_init__(self) -> None:
        if len(self.fields) != len(self.values):
            raise ValueError(f"{len(self.fields)} fields but {len(self.values)} values")
        if not all(isinstance(v, str) for v in self.values):
            raise TypeError("FieldRecord values must be strings")

    @classmethod
    def from_mapping(cls, schema: Tuple[str, ...], data: Mapping[str, str]) -> FieldRecord:
        """Build a record for *schema*; keys outside the schema are ignored."""
        return cls(fields=schema, values=tuple(data.get(name) or "" for name in schema))

    @classmethod
    def empty(cls, schema: Tuple[str, ...] = FULL_FIELDS, *, failed: bool = False) -> FieldRecord:
        return cls(fields=schema, values=("",) * len(schema), extraction_failed=failed)

    def as_dict(self) -> Dict[str, str]:
        return dict(zip(self.fields, self.values))


# ---------------------------------------------------------------------------
# Field getters
# ---------------------------------------------------------------------------


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    # the first match in document order wins, whether name= or property=
    tag = soup.select_one(f'meta[name="{name}"], meta[property="{name}"]')
    if not isinstance(tag, Tag):
        return ""
    content = tag.get("content")
    return content if isinstance(content, str) else ""


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    tag = soup.select_one(selector)
    return tag.get_text().strip() if isinstance(tag, Tag) else ""


def _title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    if not isinstance(tag, Tag):
        return ""
    return " ".join(tag.get_text().split())


def _canonical(soup: BeautifulSoup) -> str:
    """
    ``<link rel="canonical">`` href, else ``<meta name="canonical">`` content.

    The link tag usually carries an absolute URL, so after a domain move every
    page reports a canonical change. Use ``canonical_source="meta"`` to read
    only the meta tag.
    """
    link = soup.select_one('link[rel~="canonical"]')
    if isinstance(link, Tag):
        href = link.get("href")
        if isinstance(href, str):
            return href.strip()
    return _meta_content(soup, "canonical")


_GETTERS: Dict[str, Callable[[BeautifulSoup], str]] = {
    "title": _title,
    "description": lambda s: _meta_content(s, "description"),
    "keywords": lambda s: _meta_content(s, "keywords"),
    "h1": lambda s: _first_text(s, "h1"),
    "h2": lambda s: _first_text(s, "h2"),
    "canonical": _canonical,
    "robots": lambda s: _meta_content(s, "robots"),
    "ogTitle": lambda s: _meta_content(s, "og:title"),
    "ogDescription": lambda s: _meta_content(s, "og:description"),
    "ogImage": lambda s: _meta_content(s, "og:image"),
    "twitterCard": lambda s: _meta_content(s, "twitter:card"),
    "twitterTitle": lambda s: _meta_content(s, "twitter:title"),
    "twitterDescription": lambda s: _meta_content(s, "twitter:description"),
}


CanonicalSource = Literal["link", "meta"]


class FieldExtractor:
    """Extracts a :class:`FieldRecord` of a fixed schema from HTML."""

    def __init__(self, schema: Tuple[str, ...] = FULL_FIELDS, canonical_source: CanonicalSource = "link") -> None:
        unknown = [name for name in schema if name not in _GETTERS]
        if unknown:
            raise ValueError(f"No extractor for fields: {', '.join(unknown)}")
        self.schema = tuple(schema)
        self.getters = dict(_GETTERS)
        if canonical_source == "meta":
            self.getters["canonical"] = lambda s: _meta_content(s, "canonical")

    def extract(self, html: str, url: str = "") -> FieldRecord:
        try:
            soup = BeautifulSoup(html, "html.parser")
            values = tuple(self.getters[name](soup) for name in self.schema)
        except Exception as exc:
            logger.warning("Error extracting page info for %s: %s", url or "<html>", exc)
            return FieldRecord.empty(self.schema, failed=True)
        return FieldRecord(fields=self.schema, values=values)


def extract_fields(html: str, schema: Tuple[str, ...] = FULL_FIELDS, url: str = "") -> FieldRecord:
    """Module-level shortcut for ``FieldExtractor(schema).extract(html, url)``."""
    return FieldExtractor(schema).extract(html, url)
