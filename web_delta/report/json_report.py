# web_delta/report/json_report.py

"""
Генерация JSON-артефактов Web Delta.

* снапшот сайта — ``{"urls": [...], "snapshots": {ключ: html}}``;
* результат сравнения — сериализованный MigrationReport.
"""
import json
from pathlib import Path
from typing import Any

from web_delta.aggregator import MigrationReport
from web_delta.crawler.models import CrawlResult
from web_delta.utils import sanitize_url_key


def _dump(data: Any, output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return output


def write_snapshot(crawl: CrawlResult, output_path: Path | str) -> Path:
    """
    Сохраняет URL и HTML-снапшоты одного сайта.

    Ключи снапшотов — URL, в которых каждый не буквенно-цифровой символ
    заменён на ``_``.

    :param crawl: результат обхода сайта
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    data = {
        'urls': list(crawl.urls),
        'snapshots': {sanitize_url_key(url): html for url, html in crawl.snapshots.items()},
    }
    return _dump(data, output_path)


def render_json(report: MigrationReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    Пример:
    ```python
    from web_delta.report.json_report import render_json
    report_path = render_json(run.report, 'results/migration_comparison.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=True), encoding="utf-8")
    return output
