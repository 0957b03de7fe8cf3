# === FILE: web_delta/cli.py ===
#!/usr/bin/env python3
"""
Точка входа Web Delta: сравнение старого и нового сайта после миграции.

Обязательные опции:
  --old, -o URL       Старый сайт (префикс обхода)
  --new, -n URL       Новый сайт (префикс обхода)

Дополнительно:
  --quick             Быстрый режим (не больше quick_max_pages страниц на сайт)
  --config PATH       YAML/JSON-конфиг; опции CLI имеют приоритет
  --max-pages INT     Лимит страниц на сайт
  --renderer NAME     browser (headless Chromium) или static (HTTP без JS)
  --concurrent        Обходить оба сайта параллельно
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --version, -v       Показать версию Web Delta

Пример:
  web-delta --old=https://oldwebsite.com --new=https://newwebsite.com --quick
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from web_delta import __version__
from web_delta.config import load_config
from web_delta.engine import start_comparison
from web_delta.logger import init_logging
from web_delta.renderer import RendererSetupError
from web_delta.report import save_artifacts
from web_delta.utils import ensure_dir

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Web Delta, version %(version)s')
@click.option('--old', '-o', 'old_url', default=None, help='Старый сайт, например https://oldwebsite.com')
@click.option('--new', '-n', 'new_url', default=None, help='Новый сайт, например https://newwebsite.com')
@click.option('--quick', is_flag=True, default=False, help='Быстрое сравнение (по умолчанию не больше 10 страниц)')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--max-pages', '-l', 'max_pages', type=click.IntRange(min=0), default=None,
              help='Макс. число страниц на сайт')
@click.option('--renderer', 'renderer', type=click.Choice(['browser', 'static']), default=None,
              help='Способ загрузки страниц')
@click.option('--concurrent', is_flag=True, default=False, help='Обходить оба сайта параллельно')
@click.option('--schema', 'field_schema', type=click.Choice(['full', 'reduced']), default=None,
              help='Набор сравниваемых SEO-полей')
@click.option('--url-matching', 'url_matching', type=click.Choice(['exact', 'normalized']), default=None,
              help='Сравнение URL: точное или без учёта слеша/регистра/порядка query')
@click.option('--snapshots-dir', 'snapshots_dir', type=click.Path(file_okay=False, path_type=Path),
              default=None, help='Каталог для HTML-снапшотов')
@click.option('--results-dir', 'results_dir', type=click.Path(file_okay=False, path_type=Path),
              default=None, help='Каталог для результатов')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
def cli(old_url, new_url, quick, config_path, max_pages, renderer, concurrent, field_schema,
        url_matching, snapshots_dir, results_dir, log_level, log_file):
    """Сравнивает два сайта: пропавшие и новые URL, изменения SEO-полей."""
    logger = init_logging(level=log_level, log_file=str(log_file) if log_file else None)

    if config_path is None and (not old_url or not new_url):
        print_error('Требуются опции --old/-o и --new/-n (см. --help).')

    try:
        cfg = load_config(
            config_path,
            old_url=old_url,
            new_url=new_url,
            quick=quick or None,
            max_pages=max_pages,
            concurrent_crawls=concurrent or None,
            field_schema=field_schema,
            url_matching=url_matching,
            snapshots_dir=snapshots_dir,
            results_dir=results_dir,
            render={'engine': renderer},
        )
    except (ValidationError, ValueError, TypeError, OSError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    # каталоги создаются до обхода, чтобы не терять результат долгого краула
    try:
        ensure_dir(cfg.snapshots_dir)
        ensure_dir(cfg.results_dir)
    except OSError as e:
        print_error(f'Не удалось создать каталог для результатов: {e}')

    mode = 'quick' if cfg.quick else 'full'
    click.echo(f'Comparing {cfg.old_url} -> {cfg.new_url} ({mode} mode)')
    try:
        run = asyncio.run(start_comparison(cfg))
    except RendererSetupError as e:
        print_error(f'Не удалось запустить рендерер: {e}')
    except Exception as e:
        logger.exception('Comparison failed')
        print_error(f'Ошибка при сравнении: {e}')

    try:
        paths = save_artifacts(run, cfg.snapshots_dir, cfg.results_dir)
    except OSError as e:
        print_error(f'Ошибка при сохранении результатов: {e}')

    summary = run.report.summary
    click.echo(
        f"Old URLs: {summary['oldWebsiteUrls']}, new URLs: {summary['newWebsiteUrls']}, "
        f"missing: {summary['missingUrls']}, new: {summary['newUrls']}, "
        f"pages with changes: {summary['pagesWithChanges']}"
    )
    click.echo(f"Results saved to: {paths['results']}")
    click.echo(f"Report saved to: {paths['report']}")
    click.echo(f"Snapshots saved to: {cfg.snapshots_dir}")
    click.echo(f'{mode} migration comparison completed successfully!')


if __name__ == "__main__":
    cli()
