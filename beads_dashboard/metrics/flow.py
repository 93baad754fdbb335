"""
Cumulative flow timeline.

Builds a gap-free daily series of running open/closed totals from the
earliest referenced calendar day through the day of the reference instant.
Days without activity are filled with zeros so the stacked area chart stays
continuous.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Sequence

import pandas as pd

from ..store.models import IssueRecord
from .aging import ensure_utc
from .models import FlowPoint

logger = logging.getLogger("beads_dashboard.metrics")


def _daily_counts(days: Sequence[date], index: pd.DatetimeIndex) -> pd.Series:
    """Occurrences per calendar day, reindexed onto the full timeline."""
    if not days:
        return pd.Series(0, index=index, dtype="int64")
    counts = pd.Series(pd.to_datetime(list(days))).value_counts()
    return counts.reindex(index, fill_value=0).astype("int64")


def calculate_cumulative_flow(issues: Sequence[IssueRecord], now: datetime) -> List[FlowPoint]:
    """
    Cumulative flow diagram data.

    Args:
        issues: Records to chart (tombstones already removed)
        now: Reference instant; its UTC date is the last day of the timeline

    Returns:
        One FlowPoint per calendar day, ascending, where
        open = running created - running closed
    """
    if not issues:
        return []

    today = ensure_utc(now).astimezone(timezone.utc).date()

    # Calendar day as written in the timestamp, not converted
    created_days = [issue.created_at.date() for issue in issues]
    closed_days = [
        issue.updated_at.date()
        for issue in issues
        if issue.is_closed and issue.updated_at is not None
    ]

    earliest = min(created_days + closed_days + [today])
    timeline = pd.date_range(start=earliest, end=today, freq="D")

    activity = pd.DataFrame({
        "created": _daily_counts(created_days, timeline),
        "closed": _daily_counts(closed_days, timeline),
    }, index=timeline)
    running = activity.cumsum()

    logger.debug(f"Cumulative flow: {len(timeline)} days from {earliest} to {today}")

    return [
        FlowPoint(
            date=day.date(),
            open=int(running.at[day, "created"] - running.at[day, "closed"]),
            closed=int(running.at[day, "closed"]),
            throughput=int(activity.at[day, "closed"]),
            created=int(activity.at[day, "created"]),
        )
        for day in timeline
    ]
