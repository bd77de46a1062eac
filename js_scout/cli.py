# === FILE: js_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for JsScout.

Reads seed page URLs (one per line) from a file or stdin and prints every
JavaScript URL discovered on them, one per line, as soon as it is found.

Options:
  --input, -i PATH       File with seed URLs (stdin if omitted)
  --workers, -c INT      Number of concurrent workers
  --timeout, -t SEC      Per-request timeout
  --user-agent, -u TEXT  User-Agent header
  --config PATH          YAML/JSON config file
  --log-level LEVEL      Logging level (DEBUG, INFO, ...)
  --log-file PATH        Log file (stderr only if omitted)
  --version, -v          Show JsScout version

Example:
  cat urls.txt | js_scout -c 20 -t 10
"""
import asyncio
import sys
from pathlib import Path

import click

from js_scout import __version__
from js_scout.config import load_config, merge_overrides
from js_scout.logger import init_logging
from js_scout.scanner import start_scan

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='JsScout, version %(version)s')
@click.option(
    '--input', '-i', 'input_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='File with seed URLs, one per line (stdin if omitted).'
)
@click.option('--workers', '-c', type=int, default=None, help='Number of concurrent workers.')
@click.option('--timeout', '-t', type=float, default=None, help='Per-request timeout (seconds).')
@click.option('--user-agent', '-u', 'user_agent', default=None, help='User-Agent header.')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only if omitted)'
)
def cli(input_file, workers, timeout, user_agent, config_path, log_level, log_file):
    """Find JavaScript files referenced by the given pages."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = merge_overrides(
            load_config(config_path),
            input_file=input_file,
            workers=workers,
            timeout=timeout,
            user_agent=user_agent,
        )
    except Exception as e:
        print_error(f'Error loading configuration: {e}')

    if cfg.input_file is None:
        _run(cfg, click.get_text_stream('stdin', errors='replace'))
        return

    try:
        source = cfg.input_file.open(encoding='utf-8', errors='replace')
    except OSError as e:
        print_error(f'Could not open input file: {e}')
    with source:
        _run(cfg, source)


def _run(cfg, source) -> None:
    asyncio.run(start_scan(cfg, source, click.echo))


if __name__ == "__main__":
    cli()
