#!/usr/bin/env python3
"""
Data Routes - Raw Records and Flow Metrics
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..dependencies import DashboardDependencies
from ..schemas import parse_now
from ...metrics import calculate_metrics

logger = logging.getLogger("beads_dashboard.server")


def create_data_routes(deps: DashboardDependencies) -> APIRouter:
    """Create read-only data routes."""
    router = APIRouter()

    @router.get("/api/data")
    async def get_data():
        """All records of the active project, in file order (tombstones included)."""
        issues = await deps.load_issues()
        return [issue.to_dict() for issue in issues]

    @router.get("/api/metrics")
    async def get_metrics(now: Optional[str] = Query(None, description="ISO-8601 reference instant")):
        """Metrics snapshot; `available` is False when there is nothing to measure."""
        try:
            reference = parse_now(now) or deps.now()
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid 'now' timestamp: {now}")

        issues = await deps.load_issues()
        snapshot = calculate_metrics(issues, reference)
        if snapshot is None:
            return {"available": False, "metrics": None}
        return {"available": True, "metrics": snapshot.to_dict()}

    return router
