# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point of the LinkScout crawler.

Commands:
  scan URL    Crawl URL, print a summary (or JSON) and save the results
  config      Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

scan options:
  --depth N           Maximum depth (default 1)
  --output DIR        Root folder for saved results (default ./scraping_results)
  --no-save           Do not write the session folder
  --json              Print the result as JSON instead of the summary
  --pretty            Indent JSON output
  --html PATH         Also render an HTML report
  --concurrency N     Parallel fetches
  --timeout SEC       Per-request timeout
  --scan-timeout SEC  Deadline for the whole crawl
  --insecure          Skip TLS certificate verification

Example:
  link-scout scan https://example.com --depth 2 --output ./results
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from link_scout import __version__
from link_scout.config import load_config
from link_scout.engine import start_scan
from link_scout.errors import SetupError
from link_scout.logger import DEFAULT_FORMAT, init_logging, logger
from link_scout.progress import LoggingProgress
from link_scout.report.console import render_summary
from link_scout.report.html_report import render_html

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
DEFAULT_OUTPUT_DIR = Path("./scraping_results")


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """LinkScout command group."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Configuration error: {e}')


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Maximum depth for recursive scraping (default: 1)')
@click.option('--output', '-o', 'output_dir', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help=f'Folder to save results (default: {DEFAULT_OUTPUT_DIR})')
@click.option('--no-save', is_flag=True, help='Do not save results to disk')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option('--html', 'html_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Save an HTML report to this file')
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='Parallel fetches')
@click.option('--timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option('--scan-timeout', 'scan_timeout', type=float, default=None,
              help='Deadline for the whole crawl (seconds)')
@click.option('--insecure', is_flag=True, help='Skip TLS certificate verification')
@click.pass_context
def scan(ctx, url, max_depth, output_dir, no_save, as_json, pretty, html_output,
         concurrency, timeout, scan_timeout, insecure):
    """Crawl URL and report every link found."""
    overrides = dict(
        base_url=url,
        max_depth=max_depth,
        concurrency=concurrency,
        timeout=timeout,
        run_timeout=scan_timeout,
        verify_ssl=False if insecure else None,
    )
    cfg = _load(ctx, output_dir=output_dir, **overrides)
    if no_save:
        cfg = cfg.model_copy(update={'output_dir': None})
    elif cfg.output_dir is None:
        cfg = cfg.model_copy(update={'output_dir': DEFAULT_OUTPUT_DIR})

    logger.info('Starting scrape of %s (max depth %d)', cfg.base_url, cfg.max_depth)
    try:
        result = asyncio.run(start_scan(cfg, LoggingProgress()))
    except SetupError as e:
        print_error(f'Setup error: {e}')

    if as_json:
        click.echo(result.json(pretty=pretty))
    else:
        click.echo(render_summary(result, samples=cfg.sample_size))

    if html_output:
        try:
            saved_html = render_html(result, html_output)
            logger.info('HTML report: %s', saved_html)
        except Exception as e:
            print_error(f'Error saving HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Show the effective configuration as JSON."""
    cfg = _load(ctx, base_url=url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
