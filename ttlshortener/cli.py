"""
Shorten a batch of URLs from a YAML file and try out the resulting links.

This script follows this procedure:
- Step 1: Load registry configuration (see ttlshortener.utils.config)
- Step 2: Load link entries from a YAML file
- Step 3: Submit the entries as one batch through the shorten handler
- Step 4: Visit each --visit path through the redirect handler
- Step 5: Print a JSON report (optionally with statistics)

CLI usage:
    $ python -m ttlshortener batch links.yaml
    $ python -m ttlshortener batch links.yaml --visit docs --visit /statistics
    $ python -m ttlshortener batch links.yaml --stats --config config/local.yaml

YAML format (a list, or a mapping with a `links:` list):
    - url: https://example.com/docs
      ttlMinutes: 60
      customCode: docs
    - url: https://example.com/blog

YAML types unquoted scalars: `url` and `customCode` values are turned back into
strings, but quote codes with leading zeros (`customCode: '0123'`) since YAML
reads `0123` as an octal number.

The registry lives in this process only: links vanish when the command exits.

Exit codes:
    0: Report printed (individual entries may still have failed)
    2: Bad arguments, or unreadable links/config file
"""

import sys
import json
import argparse
from datetime import date
from typing import Any

import yaml

from ttlshortener.dao import LinkMemoryDAO
from ttlshortener.exceptions import ConfigurationError
from ttlshortener.handlers.shorten_url import app as shorten_url
from ttlshortener.handlers.redirect_url import app as redirect_url
from ttlshortener.handlers.list_links import app as list_links
from ttlshortener.utils.config import load_config
from ttlshortener.utils.logging import initialize_logging


TEXT_FIELDS = ('url', 'customCode')


def _normalize_entry(entry: Any) -> Any:
    if not isinstance(entry, dict):
        return entry

    entry = dict(entry)
    for key in TEXT_FIELDS:
        value = entry.get(key)
        if isinstance(value, (int, float, date)) and not isinstance(value, bool):
            entry[key] = str(value)
    return entry


def _load_entries(path: str) -> list[Any]:
    """Load link entries from a YAML file.

    Unquoted dates and numbers under `url` or `customCode` are read back as
    strings, so `customCode: 123456` means the shortcode '123456'.

    Raises:
        ValueError: If the document is neither a list nor a mapping with a `links` list,
            or holds values that can't travel in a JSON request body.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get('links')
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of links in '{path}'.")

    entries = [_normalize_entry(entry) for entry in data]
    try:
        json.dumps(entries)
    except TypeError as e:
        raise ValueError(f"Unsupported value in '{path}': {e}") from e
    return entries


def _body(response: dict) -> Any:
    return json.loads(response['body'])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ttlshortener',
        description='Shorten URLs into time-limited short links (in-memory, single process)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (defaults to $LOG_LEVEL or INFO). Logs go to stderr.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    batch = subparsers.add_parser('batch', help='Shorten the links listed in a YAML file')
    batch.add_argument('links_file', help='YAML file with link entries')
    batch.add_argument(
        '--visit',
        action='append',
        default=[],
        metavar='PATH',
        help='Path to resolve after shortening (repeatable), e.g. "abc123" or "/abc123"',
    )
    batch.add_argument(
        '--stats',
        action='store_true',
        help='Include the active link statistics in the report',
    )
    batch.add_argument(
        '--config',
        default=None,
        help='Registry configuration YAML file',
    )
    return parser


def run_batch(args: argparse.Namespace) -> dict[str, Any]:
    config = load_config(args.config)
    registry = LinkMemoryDAO.from_config(config)

    entries = _load_entries(args.links_file)
    event = {'body': json.dumps({'links': entries})}
    response = shorten_url.handler(event, registry, max_batch_size=config.max_batch_size)
    report: dict[str, Any] = {'shorten': {'statusCode': response['statusCode'], **_body(response)}}

    visits = []
    for path in args.visit:
        path = path if path.startswith('/') else f'/{path}'
        response = redirect_url.handler({'path': path}, registry)
        visit = {'path': path, 'statusCode': response['statusCode']}
        if response['statusCode'] == 302:
            visit['location'] = response['headers']['Location']
        else:
            visit.update(_body(response))
        visits.append(visit)
    if visits:
        report['visits'] = visits

    if args.stats:
        report['statistics'] = _body(list_links.handler({}, registry))

    return report


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv (list[str] | None): Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        int: Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    initialize_logging(args.log_level)

    try:
        report = run_batch(args)
    except (OSError, ValueError, yaml.YAMLError, ConfigurationError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 2

    print(json.dumps(report, indent=2))
    return 0
