"""
Metrics snapshot composition.

calculate_metrics() is the single query the presentation layer calls. It is
deterministic in (issues, now) and returns None when nothing is left to chart
after soft-deleted records are removed.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..store.models import IssueRecord
from .aging import (
    calculate_age_distribution,
    calculate_aging_wip,
    calculate_average_age,
    open_issues,
)
from .constants import CYCLE_TIME_PERCENTILES
from .flow import calculate_cumulative_flow
from .lead_time import calculate_lead_time, calculate_percentile
from .models import MetricsSnapshot

logger = logging.getLogger("beads_dashboard.metrics")


def active_issues(issues: Sequence[IssueRecord]) -> List[IssueRecord]:
    """Drop tombstoned (soft-deleted) records."""
    return [issue for issue in issues if not issue.is_tombstone]


def format_average_age(avg_age_days: float) -> str:
    return f"{avg_age_days:.1f}"


def calculate_metrics(issues: Sequence[IssueRecord], now: datetime) -> Optional[MetricsSnapshot]:
    """
    Compute the full metrics snapshot.

    Args:
        issues: Raw records in any order
        now: Reference instant for ages and the end of the flow timeline

    Returns:
        MetricsSnapshot, or None when there are no non-tombstone records
    """
    active = active_issues(issues)
    if not active:
        logger.debug(f"No metrics available ({len(issues)} records, all tombstoned or none)")
        return None

    lead_time = calculate_lead_time(active)
    cycle_times = [point.cycle_time for point in lead_time]
    p50, p85 = (calculate_percentile(cycle_times, p) for p in CYCLE_TIME_PERCENTILES)
    avg_age_days = calculate_average_age(active, now)

    return MetricsSnapshot(
        avg_age=format_average_age(avg_age_days),
        avg_age_days=avg_age_days,
        open_count=len(open_issues(active)),
        cycle_time_p50=p50,
        cycle_time_p85=p85,
        lead_time=lead_time,
        aging_wip=calculate_aging_wip(active, now),
        flow=calculate_cumulative_flow(active, now),
        age_distribution=calculate_age_distribution(active, now),
    )
