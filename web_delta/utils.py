# File: web_delta/utils.py
"""web_delta.utils: небольшие утилиты для URL-ключей, временных меток и путей."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from web_delta.logger import logger

__all__: Sequence[str] = (
    "sanitize_url_key",
    "timestamp_slug",
    "utc_now_iso",
    "ensure_dir",
)

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def sanitize_url_key(url: str) -> str:
    """Заменяет каждый не буквенно-цифровой символ на ``_`` (ключ снапшота)."""
    return _NON_ALNUM_RE.sub("_", url)


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """ISO-время в UTC с миллисекундами и суффиксом ``Z``."""
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def timestamp_slug(now: Optional[datetime] = None) -> str:
    """Метка для имён файлов: ``2024-05-01T10-20-30``."""
    return re.sub(r"[:.]", "-", utc_now_iso(now))[:19]


def ensure_dir(path: Union[str, Path]) -> Path:
    """Раскрывает `~`, создаёт каталог при необходимости и возвращает Path."""
    p = Path(path).expanduser()
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Cannot create directory %s: %s", p, exc)
        raise
    return p

