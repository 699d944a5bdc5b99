# === FILE: deadlink_finder/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска DeadLinkFinder через командную строку.

Команды:
  scan URL  Найти битые ссылки на сайте и вывести/сохранить отчёт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --depth INT         Максимальная глубина обхода (override max_depth)
  --max-links INT     Лимит ссылок на страницу (override max_links)
  --parser NAME       regex | html
  --output PATH       Сохранить текстовый отчёт в файл
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2

Ctrl+C во время сканирования останавливает его и сохраняет то, что уже найдено.

Пример:
  deadlink-finder scan https://example.com --depth 2 --output deadlinks.txt
"""
import sys
from pathlib import Path

import click

from deadlink_finder import __version__
from deadlink_finder.aggregator import aggregate_findings
from deadlink_finder.config import load_config
from deadlink_finder.crawler.models import Finding
from deadlink_finder.engine import ScanEngine
from deadlink_finder.logger import DEFAULT_FORMAT, init_logging
from deadlink_finder.report.html_report import render_html
from deadlink_finder.report.json_report import render_json
from deadlink_finder.report.text_report import render_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
_POLL_INTERVAL = 0.2


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='DeadLinkFinder, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд DeadLinkFinder CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def _echo_finding(finding: Finding) -> None:
    click.echo(finding.as_line())


def _wait_for_scan(engine: ScanEngine) -> None:
    """Печатает находки в этом потоке до конца сканирования; первый Ctrl+C просит остановку."""
    try:
        while not engine.wait(_POLL_INTERVAL):
            engine.sink.dispatch(_echo_finding)
    except KeyboardInterrupt:
        click.secho('Stopping scan…', fg='yellow', err=True)
        engine.stop_scan()
        engine.wait()
    engine.sink.dispatch(_echo_finding)


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('seed_url')
@click.option('--depth', '-d', 'depth', type=click.IntRange(min=0), default=None,
              help='Максимальная глубина обхода (override max_depth)')
@click.option('--max-links', 'max_links', type=click.IntRange(min=1), default=None,
              help='Лимит ссылок на страницу (override max_links)')
@click.option('--parser', 'link_parser', type=click.Choice(['regex', 'html']), default=None,
              help='Способ извлечения ссылок')
@click.option(
    '--output', '-o', 'text_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить текстовый отчёт в файл'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном report.html.j2'
)
@click.pass_context
def scan(ctx, seed_url, depth, max_links, link_parser, text_output, json_output, html_output, template_dir):
    """Найти битые ссылки начиная с SEED_URL."""
    cfg = ctx.obj['config']
    overrides = {
        key: value
        for key, value in (('max_depth', depth), ('max_links', max_links), ('link_parser', link_parser))
        if value is not None
    }
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    engine = ScanEngine(cfg)
    click.echo(f'Scanning for dead links: {seed_url}')
    if not engine.start_scan(seed_url):
        print_error('Сканирование уже запущено')
    _wait_for_scan(engine)

    report = aggregate_findings(seed_url, engine.findings())
    click.echo(f'Dead links: {len(report.dead_links)}, unreachable: {len(report.unreachable)}')

    if text_output:
        try:
            click.echo(f'Text report: {render_text(report, text_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении отчёта: {e}')

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(report, json_output)}')
        except (OSError, TypeError) as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(report, template_dir, html_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
