"""
Beads Dashboard - flow metrics and live refresh for beads issue trackers.
"""

__version__ = "0.1.0"
