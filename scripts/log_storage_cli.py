#!/usr/bin/env python3
"""Smoke-test the log storage plugin against the configured bucket."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from logstore.config import app_config  # noqa: E402
from logstore.config.version import get_version  # noqa: E402
from logstore.services.storage import (  # noqa: E402
    AdapterError,
    ConfigurationError,
    ExecutionContext,
    create_plugin,
    load_storage_settings_from_env,
)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Store, check or retrieve an execution log file')
    p.add_argument('action', choices=('store', 'state', 'retrieve'))
    p.add_argument('file', nargs='?', default=None, help='Local file to upload or to write into')
    p.add_argument('--bucket', default=None, help='Overrides LOG_STORAGE_BUCKET')
    p.add_argument('--path', default=None, help='Overrides LOG_STORAGE_PATH')
    p.add_argument('--backend', choices=('s3', 'local'), default=None, help='Overrides LOG_STORAGE_BACKEND')
    p.add_argument('--execid', default='testexecid')
    p.add_argument('--project', default='testproject')
    p.add_argument('--file-type', default='rdlog')
    p.add_argument('--version', action='version', version=f'%(prog)s {get_version()}')
    args = p.parse_args(argv)
    if args.action in ('store', 'retrieve') and not args.file:
        p.error(f'{args.action} requires a file argument')
    return args


def configure_logging():
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(app_config.LOG_LEVEL)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(app_config.LOG_LEVEL)
    root_logger.addHandler(handler)

    # botocore is noisy at DEBUG
    logging.getLogger('botocore').setLevel(logging.WARNING)


def main(argv=None):
    args = parse_args(argv)
    configure_logging()

    settings = load_storage_settings_from_env()
    if args.bucket:
        settings.bucket = args.bucket
    if args.path:
        settings.path = args.path
    if args.backend:
        settings.backend = args.backend

    summary = {'action': args.action, 'file_type': args.file_type}
    try:
        plugin = create_plugin(settings)
        summary['path'] = plugin.initialize(ExecutionContext(execid=args.execid, project=args.project))

        if args.action == 'store':
            modified = datetime.fromtimestamp(os.path.getmtime(args.file), tz=timezone.utc)
            stored = plugin.store(args.file_type, open(args.file, 'rb'), os.path.getsize(args.file), modified)
            summary.update({'locator': stored.locator, 'size': stored.size})
        elif args.action == 'state':
            summary['available'] = plugin.is_available(args.file_type)
        else:
            retrieved = plugin.retrieve(args.file_type, open(args.file, 'wb'))
            summary.update({'locator': retrieved.locator, 'found': retrieved.found, 'size': retrieved.size})
    except ConfigurationError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        return 2
    except AdapterError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        return 1
    except OSError as exc:
        print(f'ERROR: cannot access {args.file}: {exc}', file=sys.stderr)
        return 1

    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
