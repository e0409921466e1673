"""
Tests for the scan / trash operations and the web API built on them.
"""

import os
import threading

import pytest

from mediasorter import trash as trash_module
from mediasorter.api import scan, scan_selection, trash
from mediasorter.app import create_app
from mediasorter.exceptions import SelectionCancelled
from mediasorter.models import ScanProgress, TrashProgress
from mediasorter.state import HistoryManager, session_state


class FakeTrash:
    def __init__(self):
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        if not os.path.exists(path):
            raise FileNotFoundError(path)
        os.remove(path)


@pytest.fixture
def fake_trash(monkeypatch):
    fake = FakeTrash()
    monkeypatch.setattr(trash_module, "send2trash", fake)
    return fake


@pytest.fixture
def client():
    """Flask test client with a fresh session."""
    session_state.wait(10)
    session_state.reset()
    app = create_app()
    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client
    session_state.wait(10)
    session_state.reset()


class TestScanOperation:
    """Test the scan() entry point."""

    def test_scan_tree(self, media_tree):
        events = []
        result = scan([str(media_tree)], progress_callback=events.append)

        assert result.roots == [str(media_tree)]
        assert len(result.items) == 7
        assert result.skipped_paths == []
        assert result.cancelled is False
        assert events[0] == ScanProgress(loaded=0, total=7)
        assert events[-1] == ScanProgress(loaded=7, total=7)
        assert [e.loaded for e in events] == list(range(8))

    def test_items_tagged_with_their_root(self, media_tree, temp_dir):
        other = temp_dir / "other"
        other.mkdir()
        (other / "movie.mov").write_bytes(b"\x00" * 10)

        result = scan([str(media_tree), str(other)])

        by_name = {item.name: item for item in result.items}
        assert by_name["movie.mov"].origin_root == str(other)
        assert by_name["red1.png"].origin_root == str(media_tree)

    def test_empty_roots(self):
        """No roots means one progress event and an empty result."""
        events = []
        result = scan([], progress_callback=events.append)
        assert result.items == []
        assert events == [ScanProgress(loaded=0, total=0)]

    def test_none_roots_rejected(self):
        with pytest.raises(ValueError):
            scan(None)

    def test_cancel_marks_result(self, media_tree):
        cancel = threading.Event()

        def on_progress(progress):
            if progress.loaded >= 1:
                cancel.set()

        result = scan([str(media_tree)], progress_callback=on_progress,
                      max_workers=1, cancel_event=cancel)

        assert result.cancelled is True
        assert len(result.items) == 1

    def test_selection_cancelled(self):
        """A cancelled folder picker yields an empty result and no events."""
        def picker():
            raise SelectionCancelled("closed")

        events = []
        result = scan_selection(picker, progress_callback=events.append)

        assert result.roots == []
        assert result.items == []
        assert events == []

    def test_selection_scanned(self, media_tree):
        result = scan_selection(lambda: [str(media_tree)])
        assert result.roots == [str(media_tree)]
        assert len(result.items) == 7


class TestTrashOperation:
    """Test the trash() entry point."""

    def test_injected_primitive(self, temp_dir):
        target = temp_dir / "a.jpg"
        target.write_bytes(b"x")
        events = []

        result = trash([str(target)], progress_callback=events.append, trash_func=FakeTrash())

        assert result.trashed_paths == [str(target)]
        assert events == [TrashProgress(processed=0, total=1), TrashProgress(processed=1, total=1)]

    def test_default_primitive(self, temp_dir, fake_trash):
        missing = str(temp_dir / "missing.jpg")
        result = trash([missing])
        assert result.failed_paths == [missing]
        assert fake_trash.calls == [missing]


class TestRoutes:
    """Test the Flask API."""

    def _scan(self, client, roots, **extra):
        response = client.post('/api/scan', json={'roots': roots, **extra})
        assert response.status_code == 200
        assert session_state.wait(30)
        return response

    def test_ping(self, client):
        response = client.get('/api/ping')
        assert response.get_json()['status'] == 'ok'

    def test_initial_status(self, client):
        data = client.get('/api/status').get_json()
        assert data['status'] == 'idle'
        assert data['itemCount'] == 0
        assert data['scanProgress'] == {'loaded': 0, 'total': 0}

    def test_scan_then_read_results(self, client, media_tree):
        self._scan(client, [str(media_tree)])

        status = client.get('/api/status').get_json()
        assert status['status'] == 'complete'
        assert status['itemCount'] == 7
        assert status['scanProgress'] == {'loaded': 7, 'total': 7}

        items = client.get('/api/items').get_json()
        assert items['roots'] == [str(media_tree)]
        assert {i['name'] for i in items['items']} >= {'red1.png', 'red2.png', 'clip.MP4'}

        groups = client.get('/api/groups').get_json()
        assert len(groups['exact']) == 1
        assert {i['name'] for i in groups['exact'][0]['items']} == {'red1.png', 'red2.png'}
        assert len(groups['similar']) >= 2

    def test_scan_records_history(self, client, media_tree):
        self._scan(client, [str(media_tree)])
        assert HistoryManager.load()['roots'][0] == str(media_tree)
        assert client.get('/api/history').get_json()['roots'][0] == str(media_tree)

    def test_scan_rejects_bad_input(self, client, temp_dir):
        assert client.post('/api/scan', json={}).status_code == 400
        assert client.post('/api/scan', json={'roots': 'not-a-list'}).status_code == 400
        response = client.post('/api/scan', json={'roots': [str(temp_dir / 'missing')]})
        assert response.status_code == 400
        response = client.post('/api/scan', json={'roots': [str(temp_dir)], 'threshold': 99})
        assert response.status_code == 400

    def test_groups_threshold_validated(self, client):
        assert client.get('/api/groups?threshold=abc').status_code == 400

    def test_trash_flow(self, client, media_tree, fake_trash):
        self._scan(client, [str(media_tree)])
        target = str(media_tree / "red2.png")

        response = client.post('/api/trash', json={'paths': [target]})
        assert response.status_code == 200
        assert session_state.wait(30)

        result = client.get('/api/trash/result').get_json()
        assert result == {'trashedPaths': [target], 'failedPaths': []}
        assert fake_trash.calls == [target]

        names = {i['name'] for i in client.get('/api/items').get_json()['items']}
        assert 'red2.png' not in names
        assert 'red1.png' in names

        status = client.get('/api/status').get_json()
        assert status['trashProgress'] == {'processed': 1, 'total': 1}

    def test_failed_trash_keeps_item(self, client, media_tree, fake_trash):
        self._scan(client, [str(media_tree)])
        target = media_tree / "blue.png"
        target.unlink()

        client.post('/api/trash', json={'paths': [str(target)]})
        assert session_state.wait(30)

        result = client.get('/api/trash/result').get_json()
        assert result['failedPaths'] == [str(target)]
        names = {i['name'] for i in client.get('/api/items').get_json()['items']}
        assert 'blue.png' in names

    def test_trash_outside_roots_forbidden(self, client, media_tree, temp_dir, fake_trash):
        self._scan(client, [str(media_tree)])
        outside = str(temp_dir / "elsewhere.jpg")

        response = client.post('/api/trash', json={'paths': [outside]})

        assert response.status_code == 403
        assert response.get_json()['invalid_paths'] == [outside]
        assert fake_trash.calls == []

    def test_trash_rejects_bad_input(self, client):
        assert client.post('/api/trash', json={'paths': 'x'}).status_code == 400
        assert client.post('/api/trash', json={'paths': ['relative.jpg']}).status_code == 400

    def test_no_trash_result_yet(self, client):
        assert client.get('/api/trash/result').status_code == 404

    def test_cancel_without_scan(self, client):
        assert client.post('/api/cancel').get_json()['status'] == 'no_scan_running'

    def test_clear(self, client, media_tree):
        self._scan(client, [str(media_tree)])
        assert client.post('/api/clear').get_json()['status'] == 'cleared'
        assert client.get('/api/status').get_json()['itemCount'] == 0

    def test_unknown_route_is_json(self, client):
        response = client.get('/api/does-not-exist')
        assert response.status_code == 404
        assert 'error' in response.get_json()


class TestSessionClaim:
    """Only one scan or trash run may hold the session at a time."""

    def test_try_begin_is_exclusive(self, client):
        assert session_state.try_begin('scanning')
        assert not session_state.try_begin('scanning')
        assert not session_state.try_begin('trashing')
        session_state.reset()

    def test_try_begin_rejects_idle_status(self, client):
        with pytest.raises(ValueError):
            session_state.try_begin('idle')

    def test_second_scan_rejected_while_first_starting(self, client, media_tree, monkeypatch):
        """The busy check holds even before the worker thread marks the scan."""
        import time

        starts = []
        real_start_scan = session_state.start_scan

        def slow_start_scan(*args, **kwargs):
            starts.append(args)
            time.sleep(0.05)
            real_start_scan(*args, **kwargs)

        monkeypatch.setattr(session_state, "start_scan", slow_start_scan)

        first = client.post('/api/scan', json={'roots': [str(media_tree)]})
        second = client.post('/api/scan', json={'roots': [str(media_tree)]})
        assert session_state.wait(30)

        assert first.status_code == 200
        assert second.status_code == 409
        assert len(starts) == 1

    def test_trash_rejected_while_scan_claimed(self, client, media_tree, fake_trash):
        client.post('/api/scan', json={'roots': [str(media_tree)]})
        assert session_state.wait(30)

        assert session_state.try_begin('scanning')
        response = client.post('/api/trash', json={'paths': [str(media_tree / "red2.png")]})

        assert response.status_code == 409
        assert fake_trash.calls == []
        session_state.reset()

    def test_cancel_after_claim_reaches_scan(self, client):
        """A cancel issued between claim and scan start is not lost."""
        assert session_state.try_begin('scanning')
        event = session_state.cancel_event
        session_state.request_cancel()
        session_state.start_scan(['/photos'], threshold=10, workers=1)

        assert session_state.cancel_event is event
        assert session_state.cancel_requested
        session_state.reset()
