#!/usr/bin/env python3
"""
Beads Dashboard API Dependencies - shared services handed to every route group
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..core.config import DashboardConfig
from ..core.project import ProjectManager
from ..gateway.bd import BeadsCommand
from ..notifier.broadcaster import RefreshBroadcaster
from ..notifier.watcher import ChangeNotifier
from ..store.models import IssueRecord
from ..store.reader import read_issues_async

logger = logging.getLogger("beads_dashboard.server")


class DashboardDependencies:
    """Container for the services the route factories close over."""

    def __init__(self, config: DashboardConfig, bd: Optional[BeadsCommand] = None):
        self.config = config
        self.project = ProjectManager(
            config.resolved_project_root(),
            beads_dir_name=config.beads_dir_name,
            issues_file_name=config.issues_file_name,
        )
        self.bd = bd or BeadsCommand(config.bd_executable, timeout=config.command_timeout)
        self.broadcaster = RefreshBroadcaster()
        self.notifier = ChangeNotifier(
            self.project.beads_dir,
            self.broadcaster.broadcast_refresh,
            debounce_seconds=config.debounce_seconds,
        )
        self.project.on_project_change(self._on_project_change)

    @property
    def project_root(self) -> Path:
        return self.project.project_root

    async def load_issues(self) -> List[IssueRecord]:
        """Fresh read of the active project's issues file."""
        return await read_issues_async(self.project.issues_file)

    async def find_issue(self, issue_id: str) -> Optional[IssueRecord]:
        for issue in await self.load_issues():
            if issue.id == issue_id:
                return issue
        return None

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)

    def _on_project_change(self, new_root: Path) -> None:
        if self.config.watch_enabled:
            self.notifier.retarget(self.project.beads_dir)
