"""
Derived metric types. All are transient and recomputed on every pass.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List


class AgingTier(str, Enum):
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"

    @property
    def color(self) -> str:
        return AGING_TIER_COLORS[self]


AGING_TIER_COLORS = {
    AgingTier.GREEN: "#10b981",
    AgingTier.ORANGE: "#f59e0b",
    AgingTier.RED: "#ef4444",
}


@dataclass(frozen=True)
class LeadTimePoint:
    """One closed issue on the lead time scatterplot."""
    id: str
    title: str
    closed_at: datetime
    closed_date: str
    cycle_time: int


@dataclass(frozen=True)
class AgingWipPoint:
    """One unfinished issue on the aging WIP scatterplot."""
    id: str
    title: str
    status: str
    age: int
    tier: AgingTier

    @property
    def color(self) -> str:
        return self.tier.color


@dataclass(frozen=True)
class FlowPoint:
    """One calendar day of the cumulative flow diagram."""
    date: date
    open: int
    closed: int
    throughput: int
    created: int = 0


@dataclass(frozen=True)
class AgeBucket:
    range: str
    count: int
    bucket_index: int


@dataclass(frozen=True)
class MetricsSnapshot:
    """Everything the dashboard charts need, computed from one (records, now) pair."""
    avg_age: str
    avg_age_days: float
    open_count: int
    cycle_time_p50: int
    cycle_time_p85: int
    lead_time: List[LeadTimePoint] = field(default_factory=list)
    aging_wip: List[AgingWipPoint] = field(default_factory=list)
    flow: List[FlowPoint] = field(default_factory=list)
    age_distribution: List[AgeBucket] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Plain JSON-ready dictionary; aging points carry their colour."""
        return {
            "avg_age": self.avg_age,
            "avg_age_days": self.avg_age_days,
            "open_count": self.open_count,
            "cycle_time_p50": self.cycle_time_p50,
            "cycle_time_p85": self.cycle_time_p85,
            "lead_time": [
                {
                    "id": p.id,
                    "title": p.title,
                    "closed_at": p.closed_at.isoformat(),
                    "closed_date": p.closed_date,
                    "cycle_time": p.cycle_time,
                }
                for p in self.lead_time
            ],
            "aging_wip": [
                {
                    "id": p.id,
                    "title": p.title,
                    "status": p.status,
                    "age": p.age,
                    "tier": p.tier.value,
                    "color": p.color,
                }
                for p in self.aging_wip
            ],
            "flow": [
                {
                    "date": p.date.isoformat(),
                    "open": p.open,
                    "closed": p.closed,
                    "throughput": p.throughput,
                    "created": p.created,
                }
                for p in self.flow
            ],
            "age_distribution": [
                {"range": b.range, "count": b.count, "bucket_index": b.bucket_index}
                for b in self.age_distribution
            ],
        }
