# File: web_delta/report/__init__.py
"""web_delta.report: сохранение артефактов (снапшоты, JSON, Markdown), используемое CLI и тестами."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

from web_delta.engine import ComparisonRun
from web_delta.report.json_report import render_json, write_snapshot
from web_delta.report.markdown_report import render_markdown
from web_delta.utils import ensure_dir, timestamp_slug


def save_artifacts(
    run: ComparisonRun,
    snapshots_dir: Union[str, Path],
    results_dir: Union[str, Path],
    stamp: Optional[str] = None,
) -> Dict[str, Path]:
    """Сохраняет оба снапшота, JSON-результат и Markdown-отчёт; возвращает пути."""
    stamp = stamp or timestamp_slug()
    snapshots = ensure_dir(snapshots_dir)
    results = ensure_dir(results_dir)
    return {
        "old_snapshot": write_snapshot(run.old, snapshots / f"old_website_{stamp}.json"),
        "new_snapshot": write_snapshot(run.new, snapshots / f"new_website_{stamp}.json"),
        "results": render_json(run.report, results / f"migration_comparison_{stamp}.json"),
        "report": render_markdown(run.report, results / f"migration_report_{stamp}.md"),
    }


__all__ = ["render_json", "render_markdown", "write_snapshot", "save_artifacts"]
