"""
Dashboard Configuration

Labels and styling for the dashboard page.
"""

from typing import Any, Dict

from ..metrics.models import AGING_TIER_COLORS, AgingTier
from ..store.models import PRIORITY_LABELS

# Summary cards shown above the charts, in display order
SUMMARY_CARDS = [
    {"key": "open_count", "label": "Open Issues", "unit": ""},
    {"key": "avg_age", "label": "Avg Age", "unit": "d"},
    {"key": "cycle_time_p50", "label": "Cycle Time P50", "unit": "d"},
    {"key": "cycle_time_p85", "label": "Cycle Time P85", "unit": "d"},
]

TIER_LABELS = {
    AgingTier.GREEN: "Fresh (≤7d)",
    AgingTier.ORANGE: "Aging (8-30d)",
    AgingTier.RED: "Stale (>30d)",
}

# Badge colours for record statuses
STATUS_CSS_CLASSES = {
    "open": "status-open",
    "in_progress": "status-progress",
    "blocked": "status-blocked",
    "deferred": "status-deferred",
    "pinned": "status-pinned",
    "hooked": "status-hooked",
    "closed": "status-closed",
}


def get_priority_label(priority: Any) -> str:
    """
    Human label for a 0-4 priority.

    Args:
        priority: Priority value from a record (may be missing)

    Returns:
        Label such as 'P1 High', or '—' for unknown values
    """
    try:
        value = int(priority)
    except (ValueError, TypeError):
        return '—'
    label = PRIORITY_LABELS.get(value)
    return f"P{value} {label}" if label else '—'


def format_card_value(value: Any, unit: str) -> str:
    """Format a summary card value with its unit."""
    if value is None or value == '':
        return '—'
    return f"{value}{unit}"


def tier_legend() -> Dict[str, Dict[str, str]]:
    return {
        tier.value: {"label": TIER_LABELS[tier], "color": AGING_TIER_COLORS[tier]}
        for tier in AgingTier
    }
