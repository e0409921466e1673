#!/usr/bin/env python3
"""
Media Sorter - Web API Server
=============================
Serves the scan / trash API used by a review front end. Scans and trash
runs execute on background threads; clients poll /api/status.

Run with: python -m mediasorter.app
Or: python -m mediasorter gui

Options:
    -q, --quiet     Only errors are printed
    -v, --verbose   Debug logging plus every HTTP request
    -p, --port      Port to listen on (default: 5000)
    --no-browser    Don't open the status page on start
"""

import argparse
import atexit
import logging
import threading
import webbrowser

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .api import api
from .exceptions import MediaSorterError
from .state import session_state

_logger = logging.getLogger(__name__)

# Verbosity levels
LOG_QUIET = 0
LOG_MINIMAL = 1
LOG_VERBOSE = 2


def _register_error_handlers(app: Flask) -> None:
    """Answer every error with JSON so API clients never get HTML pages."""

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(MediaSorterError)
    def handle_media_sorter_error(e):
        _logger.error(f"Request failed: {e}")
        return jsonify({'error': str(e)}), 500


def create_app(log_level: int = LOG_MINIMAL) -> Flask:
    """
    Build the Flask application with the API blueprint.

    Args:
        log_level: LOG_QUIET, LOG_MINIMAL or LOG_VERBOSE

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    if log_level < LOG_VERBOSE:
        werkzeug_level = logging.ERROR if log_level == LOG_QUIET else logging.WARNING
        logging.getLogger('werkzeug').setLevel(werkzeug_level)

    app.register_blueprint(api)
    _register_error_handlers(app)
    return app


def cancel_running_scan():
    """Ask a still-running scan to stop claiming files when the server exits."""
    if session_state.status == 'scanning':
        _logger.info("Server stopping, cancelling scan")
        session_state.request_cancel()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Media Sorter - API server')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-q', '--quiet', action='store_true',
                           help='Only print errors')
    verbosity.add_argument('-v', '--verbose', action='store_true',
                           help='Debug logging and HTTP request logs')
    parser.add_argument('-p', '--port', type=int, default=5000,
                        help='Port to listen on (default: 5000)')
    parser.add_argument('--no-browser', action='store_true',
                        help='Do not open the status page in a browser')
    return parser


def main(argv=None):
    """Main entry point for the API server."""
    args = build_parser().parse_args(argv)

    if args.quiet:
        log_level = LOG_QUIET
    elif args.verbose:
        log_level = LOG_VERBOSE
    else:
        log_level = LOG_MINIMAL

    logging.basicConfig(
        level={LOG_QUIET: logging.ERROR, LOG_MINIMAL: logging.INFO, LOG_VERBOSE: logging.DEBUG}[log_level],
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    status_url = f'http://127.0.0.1:{args.port}/api/status'
    if log_level >= LOG_MINIMAL:
        print(f"\n  MEDIA SORTER API on {status_url}\n  Press Ctrl+C to stop\n")

    if log_level < LOG_VERBOSE:
        # Hide the development server banner
        import flask.cli
        flask.cli.show_server_banner = lambda *args, **kwargs: None

    app = create_app(log_level)
    atexit.register(cancel_running_scan)

    if not args.no_browser:
        threading.Timer(1.5, webbrowser.open, args=(status_url,)).start()

    try:
        app.run(host='127.0.0.1', port=args.port, debug=False,
                threaded=True, use_reloader=False)
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':
    main()
