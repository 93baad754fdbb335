"""
Aging of unfinished work: per-issue age, colour tiers, age buckets and the mean age.

Every function takes the reference instant explicitly; nothing here reads the clock.
"""

import math
from datetime import datetime, timezone
from typing import List, Sequence

from ..store.models import IssueRecord
from .constants import AGE_BUCKETS, AGING_GREEN_MAX_DAYS, AGING_ORANGE_MAX_DAYS, ONE_DAY
from .models import AgeBucket, AgingTier, AgingWipPoint


def ensure_utc(now: datetime) -> datetime:
    """Treat a naive reference instant as UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def age_in_days(created_at: datetime, now: datetime) -> int:
    return math.floor((ensure_utc(now) - created_at) / ONE_DAY)


def aging_tier(age: int) -> AgingTier:
    if age <= AGING_GREEN_MAX_DAYS:
        return AgingTier.GREEN
    if age <= AGING_ORANGE_MAX_DAYS:
        return AgingTier.ORANGE
    return AgingTier.RED


def age_bucket_index(age: int) -> int:
    for index, (_, upper) in enumerate(AGE_BUCKETS):
        if upper is None or age <= upper:
            return index
    return len(AGE_BUCKETS) - 1


def open_issues(issues: Sequence[IssueRecord]) -> List[IssueRecord]:
    return [issue for issue in issues if not issue.is_closed]


def calculate_aging_wip(issues: Sequence[IssueRecord], now: datetime) -> List[AgingWipPoint]:
    """One point per issue that is not closed, coloured by age."""
    points = []
    for issue in open_issues(issues):
        age = age_in_days(issue.created_at, now)
        points.append(AgingWipPoint(
            id=issue.id,
            title=issue.display_title,
            status=issue.status.value,
            age=age,
            tier=aging_tier(age),
        ))
    return points


def calculate_age_distribution(issues: Sequence[IssueRecord], now: datetime) -> List[AgeBucket]:
    """Count unfinished issues into the fixed 0-7d / 8-14d / 15-30d / 30d+ buckets."""
    counts = [0] * len(AGE_BUCKETS)
    for issue in open_issues(issues):
        counts[age_bucket_index(age_in_days(issue.created_at, now))] += 1

    return [
        AgeBucket(range=label, count=counts[index], bucket_index=index)
        for index, (label, _) in enumerate(AGE_BUCKETS)
    ]


def calculate_average_age(issues: Sequence[IssueRecord], now: datetime) -> float:
    """Mean age in days of unfinished issues; 0.0 when there are none."""
    unfinished = open_issues(issues)
    if not unfinished:
        return 0.0
    return sum(age_in_days(issue.created_at, now) for issue in unfinished) / len(unfinished)
