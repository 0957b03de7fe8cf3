# File: web_delta/reconciler.py
"""web_delta.reconciler: сопоставление URL старого и нового сайта (missing / new / common)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Literal, Sequence, Tuple
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from web_delta.logger import logger

__all__: Sequence[str] = ("Reconciliation", "rewrite", "match_key", "reconcile")

MatchingMode = Literal["exact", "normalized"]


@dataclass(frozen=True, slots=True)
class Reconciliation:
    """Результат сопоставления двух наборов URL.

    ``missing`` и ``new`` — URL в терминах нового домена, ``common`` — URL
    старого сайта, ``pairs`` — пары (старый URL, новый URL) для общих страниц.
    """

    missing: Tuple[str, ...] = ()
    new: Tuple[str, ...] = ()
    common: Tuple[str, ...] = ()
    pairs: Tuple[Tuple[str, str], ...] = ()


def rewrite(url: str, source_domain: str, target_domain: str) -> str:
    """Подменяет префикс *source_domain* на *target_domain*; путь и query не трогаются."""
    if not url.startswith(source_domain):
        raise ValueError(f"{url!r} is outside of {source_domain!r}")
    return target_domain + url[len(source_domain):]


def match_key(url: str) -> str:
    """Ключ для нестрогого сравнения: регистр хоста, завершающий слеш, порядок query."""
    parsed = urlparse(url)
    path = parsed.path
    if len(path) > 1:
        path = path.rstrip("/")
    elif path == "":
        path = "/"
    query = urlencode(sorted(parse_qsl(parsed.query, keep_blank_values=True)), doseq=True)
    return urlunparse((parsed.scheme.lower(), parsed.netloc.lower(), path, parsed.params, query, ""))


def _exact(url: str) -> str:
    return url


_KEYS: Dict[str, Callable[[str], str]] = {"exact": _exact, "normalized": match_key}


def reconcile(
    source_urls: Iterable[str],
    source_domain: str,
    target_urls: Iterable[str],
    target_domain: str,
    matching: MatchingMode = "exact",
) -> Reconciliation:
    """Классифицирует URL двух сайтов.

    * missing — переписанные URL старого сайта, которых нет на новом;
    * new — URL нового сайта без пары на старом;
    * common — URL старого сайта, у которых есть пара на новом.

    Порядок: missing и common — в порядке *source_urls*, new — в порядке *target_urls*.
    """
    try:
        key = _KEYS[matching]
    except KeyError:
        raise ValueError(f"Unknown URL matching mode {matching!r}") from None

    sources = list(dict.fromkeys(source_urls))
    targets = list(dict.fromkeys(target_urls))

    target_by_key: Dict[str, str] = {}
    for url in targets:
        target_by_key.setdefault(key(url), url)

    rewritten = {url: rewrite(url, source_domain, target_domain) for url in sources}
    rewritten_keys = {key(u) for u in rewritten.values()}

    missing = tuple(
        dict.fromkeys(new_url for new_url in rewritten.values() if key(new_url) not in target_by_key)
    )
    new = tuple(url for url in targets if key(url) not in rewritten_keys)
    pairs = tuple(
        (old_url, target_by_key[key(new_url)])
        for old_url, new_url in rewritten.items()
        if key(new_url) in target_by_key
    )
    common = tuple(old_url for old_url, _ in pairs)

    logger.info(
        "Reconciled URLs: %d missing, %d new, %d common (%s matching)",
        len(missing),
        len(new),
        len(common),
        matching,
    )
    return Reconciliation(missing=missing, new=new, common=common, pairs=pairs)
