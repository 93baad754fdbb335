"""Unit tests for the change notifier and refresh broadcaster

Event handlers are driven with synthetic watchdog events; the debounce and
bootstrap paths run inside a real event loop, and two tests use a real
observer against a temporary directory.
"""
import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileOpenedEvent,
)

from beads_dashboard.notifier.broadcaster import REFRESH_MESSAGE, RefreshBroadcaster
from beads_dashboard.notifier.watcher import (
    BeadsDirCreatedHandler,
    BeadsDirEventHandler,
    ChangeNotifier,
)


async def wait_for_calls(callback, count, timeout=5.0):
    """Poll until an AsyncMock has been awaited `count` times."""
    deadline = asyncio.get_running_loop().time() + timeout
    while callback.await_count < count:
        if asyncio.get_running_loop().time() > deadline:
            break
        await asyncio.sleep(0.05)


class TestBeadsDirEventHandler:
    """Test which filesystem events schedule a refresh"""

    def setup_method(self):
        self.notifier = MagicMock()
        self.handler = BeadsDirEventHandler(self.notifier)

    def test_modified_file_schedules_refresh(self):
        self.handler.on_any_event(FileModifiedEvent("/p/.beads/issues.jsonl"))

        self.notifier.schedule_refresh.assert_called_once()

    def test_dotfile_ignored(self):
        self.handler.on_any_event(FileModifiedEvent("/p/.beads/.daemon.lock"))

        self.notifier.schedule_refresh.assert_not_called()

    def test_atomic_rename_onto_issues_file(self):
        """Temp dotfile renamed over issues.jsonl still counts"""
        self.handler.on_any_event(FileMovedEvent("/p/.beads/.issues.tmp", "/p/.beads/issues.jsonl"))

        self.notifier.schedule_refresh.assert_called_once()

    def test_read_only_open_ignored(self):
        self.handler.on_any_event(FileOpenedEvent("/p/.beads/issues.jsonl"))

        self.notifier.schedule_refresh.assert_not_called()


class TestBeadsDirCreatedHandler:

    def setup_method(self):
        self.notifier = MagicMock()
        self.notifier.beads_dir = Path("/p/.beads")
        self.handler = BeadsDirCreatedHandler(self.notifier)

    def test_beads_dir_creation_bootstraps(self):
        self.handler.on_created(DirCreatedEvent("/p/.beads"))

        self.notifier.schedule_bootstrap.assert_called_once()

    def test_other_directory_ignored(self):
        self.handler.on_created(DirCreatedEvent("/p/src"))

        self.notifier.schedule_bootstrap.assert_not_called()

    def test_file_with_same_name_ignored(self):
        self.handler.on_created(FileCreatedEvent("/p/.beads"))

        self.notifier.schedule_bootstrap.assert_not_called()


class TestChangeNotifier:
    """Test debounce, start failure and bootstrap"""

    def test_burst_of_events_debounced_into_one_callback(self, project_dir):
        callback = AsyncMock()

        async def scenario():
            notifier = ChangeNotifier(project_dir / ".beads", callback, debounce_seconds=0.05)
            notifier._loop = asyncio.get_running_loop()
            for _ in range(5):
                notifier.schedule_refresh()
            await asyncio.sleep(0.3)

        asyncio.run(scenario())

        assert callback.await_count == 1

    def test_callback_error_does_not_propagate(self, project_dir):
        callback = AsyncMock(side_effect=RuntimeError("boom"))

        async def scenario():
            notifier = ChangeNotifier(project_dir / ".beads", callback, debounce_seconds=0)
            notifier._loop = asyncio.get_running_loop()
            notifier.schedule_refresh()
            await asyncio.sleep(0.1)

        asyncio.run(scenario())

        assert callback.await_count == 1

    def test_schedule_without_loop_is_noop(self, project_dir):
        callback = AsyncMock()
        notifier = ChangeNotifier(project_dir / ".beads", callback)

        notifier.schedule_refresh()
        notifier.schedule_bootstrap()

        callback.assert_not_awaited()

    def test_start_failure_degrades(self, tmp_path):
        """Missing project root: warning, no watch, no exception"""
        callback = AsyncMock()

        async def scenario():
            notifier = ChangeNotifier(tmp_path / "missing" / ".beads", callback)
            started = notifier.start()
            return started, notifier.is_running

        started, running = asyncio.run(scenario())

        assert started is False
        assert running is False

    def test_retarget_before_start_only_updates_path(self, project_dir, tmp_path_factory):
        notifier = ChangeNotifier(project_dir / ".beads", AsyncMock())
        other = tmp_path_factory.mktemp("other") / ".beads"

        assert notifier.retarget(other) is False
        assert notifier.beads_dir == other

    def test_file_change_triggers_callback(self, project_dir):
        callback = AsyncMock()
        issues_file = project_dir / ".beads" / "issues.jsonl"

        async def scenario():
            notifier = ChangeNotifier(project_dir / ".beads", callback, debounce_seconds=0.05)
            assert notifier.start()
            try:
                issues_file.write_text('{"id": "a", "created_at": "2024-01-01"}\n', encoding="utf-8")
                await wait_for_calls(callback, 1)
            finally:
                notifier.stop()

        asyncio.run(scenario())

        assert callback.await_count >= 1

    def test_beads_dir_created_after_start(self, tmp_path):
        """Watch the parent, refresh once the directory appears, then follow it"""
        callback = AsyncMock()
        beads_dir = tmp_path / ".beads"

        async def scenario():
            notifier = ChangeNotifier(beads_dir, callback, debounce_seconds=0.05)
            assert notifier.start()
            try:
                beads_dir.mkdir()
                await wait_for_calls(callback, 1)
                first = callback.await_count

                (beads_dir / "issues.jsonl").write_text("{}\n", encoding="utf-8")
                await wait_for_calls(callback, first + 1)
            finally:
                notifier.stop()
            return first

        first = asyncio.run(scenario())

        assert first >= 1
        assert callback.await_count > first


class TestRefreshBroadcaster:

    def test_broadcast_to_all_connections(self):
        broadcaster = RefreshBroadcaster()
        sockets = [MagicMock(send_json=AsyncMock(), accept=AsyncMock()) for _ in range(2)]

        async def scenario():
            for ws in sockets:
                await broadcaster.connect(ws)
            return await broadcaster.broadcast_refresh()

        assert asyncio.run(scenario()) == 2
        for ws in sockets:
            ws.send_json.assert_awaited_once_with(REFRESH_MESSAGE)

    def test_failed_connection_dropped(self):
        broadcaster = RefreshBroadcaster()
        good = MagicMock(send_json=AsyncMock(), accept=AsyncMock())
        bad = MagicMock(send_json=AsyncMock(side_effect=RuntimeError("closed")), accept=AsyncMock())

        async def scenario():
            await broadcaster.connect(good)
            await broadcaster.connect(bad)
            return await broadcaster.broadcast_refresh()

        assert asyncio.run(scenario()) == 1
        assert broadcaster.connection_count == 1
        assert broadcaster.active_connections == [good]

    def test_disconnect_unknown_socket_is_noop(self):
        broadcaster = RefreshBroadcaster()

        broadcaster.disconnect(MagicMock())

        assert broadcaster.connection_count == 0
