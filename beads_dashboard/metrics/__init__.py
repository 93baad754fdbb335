"""
Metrics Engine

Pure functions from (issues, now) to chart-ready data, split by concern:
- lead_time.py: cycle times of closed issues and nearest-rank percentiles
- aging.py: ages, colour tiers, age buckets and mean age of unfinished issues
- flow.py: gap-free cumulative flow timeline
- snapshot.py: calculate_metrics() composing all of the above
"""

from .models import (
    AgeBucket,
    AgingTier,
    AgingWipPoint,
    FlowPoint,
    LeadTimePoint,
    MetricsSnapshot,
)
from .lead_time import calculate_lead_time, calculate_percentile, cycle_time_days
from .aging import (
    age_in_days,
    aging_tier,
    calculate_age_distribution,
    calculate_aging_wip,
    calculate_average_age,
)
from .flow import calculate_cumulative_flow
from .snapshot import active_issues, calculate_metrics

__all__ = [
    # Result types
    'AgeBucket',
    'AgingTier',
    'AgingWipPoint',
    'FlowPoint',
    'LeadTimePoint',
    'MetricsSnapshot',

    # Lead time
    'calculate_lead_time',
    'calculate_percentile',
    'cycle_time_days',

    # Aging
    'age_in_days',
    'aging_tier',
    'calculate_age_distribution',
    'calculate_aging_wip',
    'calculate_average_age',

    # Flow
    'calculate_cumulative_flow',

    # Snapshot
    'active_issues',
    'calculate_metrics',
]
