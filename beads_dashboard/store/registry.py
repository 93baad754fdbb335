"""
Beads project registry.

The bd daemon records every workspace it serves in ~/.beads/registry.json.
This module reads that file and reports which projects still exist and
whether their daemon process is alive.
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ValidationError

from .reader import BEADS_DIR_NAME

logger = logging.getLogger("beads_dashboard.registry")

DEFAULT_REGISTRY_PATH = "~/.beads/registry.json"


class RegistryEntry(BaseModel):
    workspace_path: str
    socket_path: Optional[str] = None
    database_path: Optional[str] = None
    pid: int = 0
    version: Optional[str] = None
    started_at: Optional[str] = None


class BeadsProject(BaseModel):
    name: str
    path: str
    is_active: bool
    pid: Optional[int] = None
    version: Optional[str] = None
    started_at: Optional[str] = None


def read_registry(registry_path: Union[str, Path] = DEFAULT_REGISTRY_PATH) -> List[RegistryEntry]:
    """Load registry entries; a missing or unreadable registry yields no entries."""
    path = Path(registry_path).expanduser()
    if not path.exists():
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error reading registry {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Registry {path} is not a list, ignoring")
        return []

    entries = []
    for item in data:
        try:
            entries.append(RegistryEntry.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid registry entry: {e.error_count()} validation error(s)")
    return entries


def is_process_running(pid: int) -> bool:
    """Probe a pid with signal 0."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, owned by another user
        return True
    except OSError:
        return False
    return True


def is_valid_project(project_path: Union[str, Path], beads_dir_name: str = BEADS_DIR_NAME) -> bool:
    """A project is valid when its path exists and holds a beads directory."""
    path = Path(project_path)
    return path.exists() and (path / beads_dir_name).is_dir()


def get_projects(
    registry_path: Union[str, Path] = DEFAULT_REGISTRY_PATH,
    beads_dir_name: str = BEADS_DIR_NAME,
) -> List[BeadsProject]:
    """Registered projects that still exist, with daemon liveness."""
    projects = []
    for entry in read_registry(registry_path):
        if not is_valid_project(entry.workspace_path, beads_dir_name):
            logger.info(f"Filtering out invalid/deleted project: {entry.workspace_path}")
            continue

        projects.append(BeadsProject(
            name=Path(entry.workspace_path).name,
            path=entry.workspace_path,
            is_active=is_process_running(entry.pid),
            pid=entry.pid,
            version=entry.version,
            started_at=entry.started_at,
        ))
    return projects
