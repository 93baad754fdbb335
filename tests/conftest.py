"""Pytest configuration and shared fixtures"""
import json
from datetime import datetime, timedelta, timezone

import pytest

from beads_dashboard.gateway.bd import BeadsCommand, BeadsCommandError
from beads_dashboard.store.models import IssueRecord

# Fixed reference instant used by metric tests
NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_issue(issue_id="bd-1", status="open", created=None, updated=None, **fields):
    """Build an IssueRecord the way the reader would from one JSON line."""
    created = NOW if created is None else created
    data = {
        "id": issue_id,
        "title": fields.pop("title", f"Issue {issue_id}"),
        "status": status,
        "created_at": _timestamp(created),
    }
    if updated is not None:
        data["updated_at"] = _timestamp(updated)
    data.update(fields)
    return IssueRecord.model_validate(data)


def _timestamp(value):
    return value.isoformat() if isinstance(value, datetime) else value


def days_ago(days, hours=0):
    return NOW - timedelta(days=days, hours=hours)


def write_issues(path, records):
    """Write records (dicts or raw strings) as JSON lines."""
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            line = record if isinstance(record, str) else json.dumps(record)
            f.write(line + "\n")


class FakeBeadsCommand(BeadsCommand):
    """Records bd invocations instead of spawning processes."""

    def __init__(self, create_output="Created issue: bd-42\n"):
        super().__init__(executable="bd", timeout=1.0)
        self.calls = []
        self.file_contents = {}
        self.create_output = create_output
        self.fail_on = set()

    async def run(self, args, cwd):
        self.calls.append(list(args))

        for arg in args:
            if arg.startswith("--") and "-file=" in arg:
                flag, _, file_path = arg.partition("=")
                with open(file_path, "r", encoding="utf-8") as f:
                    self.file_contents[flag] = f.read()

        for marker in self.fail_on:
            if any(marker in arg for arg in args):
                raise BeadsCommandError(f"bd failed on {marker}", returncode=1)

        if args and args[0] == "create":
            return self.create_output
        return ""

    def calls_for(self, command):
        return [call for call in self.calls if call and call[0] == command]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def project_dir(tmp_path):
    """A project root with an empty .beads directory"""
    beads_dir = tmp_path / ".beads"
    beads_dir.mkdir()
    return tmp_path


@pytest.fixture
def issues_file(project_dir):
    return project_dir / ".beads" / "issues.jsonl"


@pytest.fixture
def sample_records():
    """Raw JSON records: one closed, two open, one tombstone"""
    return [
        {"id": "bd-1", "title": "Closed work", "status": "closed", "priority": 1,
         "created_at": "2024-02-20T09:00:00Z", "updated_at": "2024-02-23T10:00:00Z",
         "labels": ["backend"]},
        {"id": "bd-2", "title": "Fresh work", "status": "in_progress", "priority": 2,
         "created_at": "2024-02-27T09:00:00Z", "updated_at": "2024-02-28T09:00:00Z",
         "labels": ["ui", "backend"]},
        {"id": "bd-3", "title": "Old work", "status": "open", "priority": 0,
         "created_at": "2024-01-10T09:00:00Z"},
        {"id": "bd-4", "title": "Deleted", "status": "tombstone",
         "created_at": "2024-01-01T00:00:00Z", "updated_at": "2024-01-02T00:00:00Z"},
    ]


@pytest.fixture
def fake_bd():
    return FakeBeadsCommand()


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch, tmp_path_factory):
    """Keep a developer's config.yaml / env var out of config tests"""
    monkeypatch.delenv("BEADS_DASHBOARD_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
