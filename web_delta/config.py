# === FILE: web_delta/config.py ===
"""
Модуль для загрузки и валидации конфигурации сравнения сайтов Web Delta.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = ("RenderSettings", "CompareConfig", "load_config", "ValidationError")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class RenderSettings(BaseModel):
    """Параметры рендеринга страницы (браузер или статический HTTP)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    engine: Literal["browser", "static"] = Field(
        "browser", description="browser — headless Chromium, static — обычный HTTP GET."
    )
    viewport_width: int = Field(1920, gt=0)
    viewport_height: int = Field(1080, gt=0)
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "networkidle", description="Когда считать навигацию завершённой."
    )
    timeout_ms: int = Field(30_000, gt=0, description="Таймаут на одну страницу (мс).")
    headless: bool = True


class CompareConfig(BaseModel):
    """Конфигурация одного запуска сравнения старого и нового сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    old_url: str = Field(..., description="Префикс старого сайта.")
    new_url: str = Field(..., description="Префикс нового сайта.")
    max_pages: Optional[int] = Field(None, ge=0, description="Лимит страниц на сайт (None — без лимита).")
    quick: bool = Field(False, description="Быстрый режим: не больше quick_max_pages страниц.")
    quick_max_pages: int = Field(10, ge=1)
    field_schema: Literal["full", "reduced"] = "full"
    url_matching: Literal["exact", "normalized"] = "exact"
    canonical_source: Literal["link", "meta"] = Field(
        "link", description="link — <link rel=canonical> с запасным meta, meta — только <meta name=canonical>."
    )
    flag_extraction_failures: bool = True
    concurrent_crawls: bool = False
    snapshots_dir: Path = Path("__snapshots")
    results_dir: Path = Path("results")
    render: RenderSettings = Field(default_factory=RenderSettings)

    @field_validator("old_url", "new_url")
    @classmethod
    def _check_http_url(cls, v: str) -> str:
        # префикс сохраняется как есть: он участвует в сравнении строк
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"ожидается http(s) URL, получено {v!r}")
        return v

    @property
    def page_budget(self) -> Optional[int]:
        """Итоговый лимит страниц с учётом быстрого режима."""
        if not self.quick:
            return self.max_pages
        if self.max_pages is None:
            return self.quick_max_pages
        return min(self.max_pages, self.quick_max_pages)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        elif isinstance(value, dict):
            merged[key] = _merge({}, value)
        else:
            merged[key] = value
    return merged


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CompareConfig:
    """
    Читает YAML или JSON (если путь задан), накладывает overrides
    (значения None пропускаются) и возвращает проверенный CompareConfig.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CompareConfig(**_merge(data, overrides))
