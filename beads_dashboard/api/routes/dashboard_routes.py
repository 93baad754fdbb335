#!/usr/bin/env python3
"""
Dashboard Routes - Web UI and Refresh WebSocket
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..dependencies import DashboardDependencies
from ...dashboard import DashboardController
from ...web.template_helpers import setup_template_filters

logger = logging.getLogger("beads_dashboard.server")

UI_DIR = Path(__file__).resolve().parents[2] / "ui"


def create_dashboard_routes(deps: DashboardDependencies) -> APIRouter:
    """Create dashboard page and WebSocket routes."""
    router = APIRouter()

    dashboard_controller = DashboardController()
    templates = Jinja2Templates(directory=str(UI_DIR))
    setup_template_filters(templates)

    @router.get("/", response_class=HTMLResponse)
    async def dashboard_main(request: Request):
        """Main dashboard page - summary cards and charts for the active project."""
        logger.debug("Rendering main dashboard")
        try:
            issues = await deps.load_issues()
            dashboard_data = dashboard_controller.get_dashboard_data(issues, deps.now(), deps.project_root)
        except Exception as e:
            logger.error(f"Dashboard error: {e}")
            dashboard_data = dashboard_controller.error_context(str(e), deps.project_root)

        return templates.TemplateResponse(request, "dashboard.html", dashboard_data)

    @router.websocket("/ws")
    async def refresh_socket(websocket: WebSocket):
        """Refresh channel. Clients only listen; `ping` is answered with `pong`."""
        await deps.broadcaster.connect(websocket)
        try:
            while True:
                message = await websocket.receive_text()
                if message == "ping":
                    await websocket.send_text("pong")
        except WebSocketDisconnect:
            pass
        finally:
            deps.broadcaster.disconnect(websocket)

    return router
