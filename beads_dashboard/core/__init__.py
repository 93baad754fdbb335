"""
Core services: configuration, audit logging, project tracking and the app factory.
"""

from .config import DashboardConfig, load_config, load_config_from
from .project import ProjectManager

__all__ = ["DashboardConfig", "load_config", "load_config_from", "ProjectManager"]
