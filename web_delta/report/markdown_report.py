"""web_delta.report.markdown_report: Генерация Markdown-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from web_delta.aggregator import MigrationReport

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "migration_report.md.j2"


def _build_env(template_dir: Union[Path, str]) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )


def render_markdown_text(report: MigrationReport, template_dir: Optional[Union[Path, str]] = None) -> str:
    """Рендерит Markdown-отчёт в строку."""
    env = _build_env(template_dir or DEFAULT_TEMPLATE_DIR)
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "meta": report.metadata,
        "summary": report.summary,
        "field_impact": report.field_impact,
        "missing_urls": report.missing_urls,
        "new_urls": report.new_urls,
        "pages": report.page_comparisons,
        "extraction_failures": report.extraction_failures,
    }
    return template.render(**context)


def render_markdown(
    report: MigrationReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит Markdown-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект MigrationReport.
        output_path: путь к итоговому .md-файлу.
        template_dir: директория с Jinja2-шаблонами (по умолчанию — встроенная).

    Returns:
        Path до сохранённого файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_markdown_text(report, template_dir), encoding="utf-8")
    return output_path
