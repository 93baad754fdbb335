"""
Active project tracking. The dashboard serves one beads project at a time and
can be switched to another registered project at runtime.
"""

import logging
from pathlib import Path
from typing import Callable, List, Union

from ..store.reader import BEADS_DIR_NAME, ISSUES_FILE_NAME

logger = logging.getLogger("beads_dashboard.server")


class ProjectManager:
    """Holds the current project root and notifies listeners when it changes."""

    def __init__(self, project_root: Union[str, Path],
                 beads_dir_name: str = BEADS_DIR_NAME,
                 issues_file_name: str = ISSUES_FILE_NAME):
        self._project_root = Path(project_root)
        self.beads_dir_name = beads_dir_name
        self.issues_file_name = issues_file_name
        self._listeners: List[Callable[[Path], None]] = []

    @property
    def project_root(self) -> Path:
        return self._project_root

    @property
    def beads_dir(self) -> Path:
        return self._project_root / self.beads_dir_name

    @property
    def issues_file(self) -> Path:
        return self.beads_dir / self.issues_file_name

    def set_project_root(self, project_root: Union[str, Path]) -> bool:
        """
        Switch to another project root.

        Returns:
            True if the root actually changed (listeners were notified)
        """
        new_root = Path(project_root)
        if new_root == self._project_root:
            return False

        old_root = self._project_root
        self._project_root = new_root
        logger.info(f"Project switched: {old_root} -> {new_root}")

        for listener in self._listeners:
            listener(new_root)
        return True

    def on_project_change(self, listener: Callable[[Path], None]) -> None:
        self._listeners.append(listener)
