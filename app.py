"""
checkphone - device / carrier band compatibility service.

Serves the compatibility JSON API and provides the TAC-lite preprocessing
command.
"""

from __future__ import annotations

import argparse
import logging
import sys

from flask import Flask, jsonify

import config
from utils.compat.catalog import get_catalog
from utils.compat.tac import convert_tac_file
from utils.logging import get_logger, set_level

logger = get_logger('checkphone')

app = Flask(__name__)
app.json.sort_keys = False

# Process-wide catalog, shared with the routes through register_blueprints()
catalog_cache = get_catalog()


@app.route('/health')
def health():
    """Liveness check."""
    return jsonify({
        'status': 'ok',
        'version': config.VERSION,
        'catalog_complete': catalog_cache.snapshot.complete,
    })


@app.route('/changelog')
def changelog():
    """Release notes."""
    return jsonify({'status': 'success', 'changelog': config.CHANGELOG})


def serve(args: argparse.Namespace) -> int:
    from routes import register_blueprints

    if 'compat' not in app.blueprints:
        register_blueprints(app)

    background = config.CATALOG_BACKGROUND_FETCH and not args.no_background
    catalog_cache.init(background=background)

    logger.info(f"checkphone {config.VERSION} listening on {args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def process_tac(args: argparse.Namespace) -> int:
    try:
        count = convert_tac_file(args.source, args.output)
    except (OSError, ValueError) as e:
        logger.error(f"Error processing TAC database: {e}")
        return 1
    print(f"Processed {count} TACs into {args.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='checkphone - device / carrier band compatibility'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    # No subcommand means serve with defaults
    parser.set_defaults(func=serve, host=config.HOST, port=config.PORT, no_background=False)
    subparsers = parser.add_subparsers(dest='command')

    serve_parser = subparsers.add_parser('serve', help='Run the JSON API (default)')
    serve_parser.add_argument(
        '--host',
        default=config.HOST,
        help=f'Host to bind (default: {config.HOST})'
    )
    serve_parser.add_argument(
        '--port', '-p',
        type=int,
        default=config.PORT,
        help=f'Port to listen on (default: {config.PORT})'
    )
    serve_parser.add_argument(
        '--no-background',
        action='store_true',
        help='Load the full device catalog before serving'
    )
    serve_parser.set_defaults(func=serve)

    tac_parser = subparsers.add_parser('process-tac', help='Build the bulk TAC-lite file')
    tac_parser.add_argument('source', help='TAC master JSON (brand -> models -> tacs)')
    tac_parser.add_argument('output', help='TAC-lite JSON to write')
    tac_parser.set_defaults(func=process_tac)

    args = parser.parse_args(argv)

    config.configure_logging()
    if args.debug:
        set_level(logging.DEBUG)

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
