#!/usr/bin/env python3
"""
Beads Dashboard application factory
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .config import DashboardConfig
from ..api.dependencies import DashboardDependencies
from ..api.routes import (
    create_dashboard_routes,
    create_data_routes,
    create_issue_routes,
    create_project_routes,
)
from ..gateway.bd import BeadsCommand

logger = logging.getLogger("beads_dashboard.server")


def create_app(config: DashboardConfig, bd: Optional[BeadsCommand] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Dashboard configuration
        bd: bd gateway override, used by tests to avoid spawning processes

    Returns:
        Configured FastAPI application; services are on app.state.deps
    """
    deps = DashboardDependencies(config, bd=bd)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Serving beads project: {deps.project_root}")
        if config.watch_enabled:
            deps.notifier.start()
        else:
            logger.info("File watching disabled; live refresh only after mutations")

        yield

        deps.notifier.stop()
        logger.info("Dashboard stopped")

    app = FastAPI(
        title="Beads Dashboard",
        description="Flow metrics dashboard for beads issue trackers",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.deps = deps

    app.include_router(create_dashboard_routes(deps))
    app.include_router(create_data_routes(deps))
    app.include_router(create_issue_routes(deps))
    app.include_router(create_project_routes(deps))

    return app
