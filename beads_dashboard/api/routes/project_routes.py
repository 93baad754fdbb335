#!/usr/bin/env python3
"""
Project Routes - Registry Listing, Project Switching and Health
"""

import logging
from pathlib import Path

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request

from ..dependencies import DashboardDependencies
from ..schemas import SwitchProjectRequest
from ...core.audit import audit_logger
from ...store.registry import get_projects, is_valid_project

logger = logging.getLogger("beads_dashboard.server")


def create_project_routes(deps: DashboardDependencies) -> APIRouter:
    """Create project registry and health routes."""
    router = APIRouter()

    @router.get("/api/registry")
    def get_registry():
        projects = get_projects(deps.config.registry_path, deps.config.beads_dir_name)
        return [project.model_dump() for project in projects]

    @router.get("/api/project/current")
    def get_current_project():
        root = deps.project_root
        return {"path": str(root), "name": root.name}

    @router.post("/api/project/switch")
    async def switch_project(body: SwitchProjectRequest, request: Request, background_tasks: BackgroundTasks):
        """
        Point the dashboard at another beads project and re-attach the watcher.

        Runs on the event loop: retargeting cancels the pending debounce task,
        which belongs to the loop.
        """
        if not body.path.strip():
            raise HTTPException(status_code=400, detail="Path is required")

        new_root = Path(body.path).expanduser().resolve()
        if not is_valid_project(new_root, deps.config.beads_dir_name):
            raise HTTPException(status_code=400, detail="Invalid project path or no .beads directory found")

        old_root = deps.project_root
        if deps.project.set_project_root(new_root):
            audit_logger.project_switch(str(old_root), str(new_root), request)
            background_tasks.add_task(deps.broadcaster.broadcast_refresh)

        return {"success": True, "path": str(new_root)}

    @router.get("/health")
    def health():
        return {
            "status": "ok",
            "watching": deps.notifier.is_running,
            "connections": deps.broadcaster.connection_count,
            "project_root": str(deps.project_root),
            "issues_file_exists": deps.project.issues_file.exists(),
        }

    return router
