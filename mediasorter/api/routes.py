"""
Flask routes for Media Sorter.

Exposes scan and trash as background operations with polled progress, plus
read access to the working set and its duplicate groups.
"""

from __future__ import annotations

import threading
import logging
from datetime import datetime

from flask import Blueprint, jsonify, request

from ..scanner import find_exact_duplicates, find_similar_groups
from ..state import session_state, HistoryManager
from ..utils import validators
from .orchestrator import ScanOrchestrator, TrashOrchestrator

# Create blueprint for routes
api = Blueprint('api', __name__)

# Module logger
_logger = logging.getLogger(__name__)


def _start_background(target) -> None:
    thread = threading.Thread(target=target)
    thread.daemon = True
    session_state.attach_worker(thread)
    thread.start()


# =============================================================================
# Route Handlers
# =============================================================================

@api.route('/api/ping')
def api_ping():
    """Simple endpoint for connection monitoring."""
    return jsonify({'status': 'ok', 'time': datetime.now().isoformat()})


@api.route('/api/scan', methods=['POST'])
def api_scan():
    """Start a new scan of the given roots in the background."""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Request body required'}), 400

    roots = data.get('roots')
    threshold = data.get('threshold', session_state.settings['threshold'])
    workers = data.get('workers', session_state.settings['workers'])

    is_valid, error = validators.validate_scan_params(
        roots=roots,
        threshold=threshold,
        workers=workers,
    )
    if not is_valid:
        return jsonify({'error': error}), 400

    if not session_state.try_begin('scanning'):
        return jsonify({'error': f'Operation already running: {session_state.status}'}), 409

    orchestrator = ScanOrchestrator(
        session=session_state,
        roots=roots,
        threshold=int(threshold),
        workers=int(workers),
    )
    _start_background(orchestrator.run)

    return jsonify({'status': 'started'})


@api.route('/api/cancel', methods=['POST'])
def api_cancel():
    """Cancel the current scan. Files already being hashed still finish."""
    if session_state.status == 'scanning':
        session_state.request_cancel()
        return jsonify({'status': 'cancel_requested'})
    return jsonify({'status': 'no_scan_running'})


@api.route('/api/status')
def api_status():
    """Return current status with scan and trash progress."""
    return jsonify(session_state.to_status_dict())


@api.route('/api/history')
def api_history():
    """Return recently scanned roots."""
    return jsonify(HistoryManager.load())


@api.route('/api/items')
def api_items():
    """Return the current working set."""
    return jsonify(session_state.to_items_dict())


@api.route('/api/groups')
def api_groups():
    """Return exact and similar groups computed from the working set."""
    threshold = request.args.get('threshold', session_state.settings['threshold'])
    is_valid, error = validators.validate_threshold(threshold)
    if not is_valid:
        return jsonify({'error': error}), 400

    items = session_state.snapshot_items()
    exact_groups = find_exact_duplicates(items)
    similar_groups = find_similar_groups(items, threshold=int(threshold))

    return jsonify({
        'exact': [g.to_dict() for g in exact_groups],
        'similar': [g.to_dict() for g in similar_groups],
    })


@api.route('/api/trash', methods=['POST'])
def api_trash():
    """Move a reviewed list of files to trash in the background."""
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'error': 'Request body required'}), 400

    paths = data.get('paths')
    is_valid, error = validators.validate_trash_paths(paths)
    if not is_valid:
        return jsonify({'error': error}), 400

    # Only files under the scanned roots may be trashed
    invalid_paths = [
        path for path in paths
        if not validators.validate_path_in_roots(path, session_state.roots)
    ]
    if invalid_paths:
        _logger.warning(f"Blocked trashing files outside scanned roots: {invalid_paths}")
        return jsonify({
            'error': 'Security error: some files are outside the scanned folders',
            'invalid_paths': invalid_paths,
        }), 403

    if not session_state.try_begin('trashing'):
        return jsonify({'error': f'Operation already running: {session_state.status}'}), 409

    orchestrator = TrashOrchestrator(session=session_state, paths=paths)
    _start_background(orchestrator.run)

    return jsonify({'status': 'started'})


@api.route('/api/trash/result')
def api_trash_result():
    """Return the result of the last finished trash run."""
    result = session_state.last_trash_result
    if result is None:
        return jsonify({'error': 'No trash result available'}), 404
    return jsonify(result.to_dict())


@api.route('/api/clear', methods=['POST'])
def api_clear():
    """Clear the current session."""
    if session_state.is_busy:
        return jsonify({'error': f'Operation already running: {session_state.status}'}), 409
    session_state.reset()
    return jsonify({'status': 'cleared'})
