"""
Lead time and cycle time percentiles for closed issues.
"""

import math
from datetime import datetime
from typing import List, Sequence, Union

import numpy as np

from ..store.models import IssueRecord
from .constants import ONE_DAY
from .models import LeadTimePoint

Number = Union[int, float]


def cycle_time_days(created_at: datetime, closed_at: datetime) -> int:
    """Whole days from creation to close, rounded up and never negative."""
    return max(0, math.ceil((closed_at - created_at) / ONE_DAY))


def calculate_lead_time(issues: Sequence[IssueRecord]) -> List[LeadTimePoint]:
    """
    Build lead time points for closed issues.

    The close instant is the record's last update; closed issues without one
    are left out. Points are ordered by close time.
    """
    points = [
        LeadTimePoint(
            id=issue.id,
            title=issue.display_title,
            closed_at=issue.updated_at,
            closed_date=issue.updated_at.date().isoformat(),
            cycle_time=cycle_time_days(issue.created_at, issue.updated_at),
        )
        for issue in issues
        if issue.is_closed and issue.updated_at is not None
    ]
    points.sort(key=lambda p: p.closed_at)
    return points


def calculate_percentile(values: Sequence[Number], percentile: float) -> Number:
    """
    Nearest-rank percentile: sorted(values)[floor(n * percentile)].

    Args:
        values: Numbers in any order
        percentile: Fraction in [0, 1]

    Returns:
        The selected element, or 0 for empty input
    """
    if not 0 <= percentile <= 1:
        raise ValueError(f"percentile must be within [0, 1], got {percentile}")
    if len(values) == 0:
        return 0

    ordered = np.sort(np.asarray(values))
    index = min(math.floor(len(ordered) * percentile), len(ordered) - 1)
    return ordered[index].item()
