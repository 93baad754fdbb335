"""
Route factories. Each takes the shared DashboardDependencies and returns an APIRouter.
"""

from .dashboard_routes import create_dashboard_routes
from .data_routes import create_data_routes
from .issue_routes import create_issue_routes
from .project_routes import create_project_routes

__all__ = [
    "create_dashboard_routes",
    "create_data_routes",
    "create_issue_routes",
    "create_project_routes",
]
