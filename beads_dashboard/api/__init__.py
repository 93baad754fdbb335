"""
HTTP API: request schemas, shared dependencies and route factories.
"""

from .dependencies import DashboardDependencies

__all__ = ["DashboardDependencies"]
