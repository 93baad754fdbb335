"""
Beads Dashboard Module

Server-rendered flow metrics page. Data preparation lives in Python; the page
only draws charts from the embedded snapshot.
"""

from .controller import DashboardController

__all__ = ["DashboardController"]
