"""
Fixed thresholds shared by the aging calculations.
"""

from datetime import timedelta

ONE_DAY = timedelta(days=1)

# Aging WIP colour tiers: upper bounds in whole days, inclusive
AGING_GREEN_MAX_DAYS = 7
AGING_ORANGE_MAX_DAYS = 30

# Age distribution buckets: (label, inclusive upper bound in days; None = open-ended)
AGE_BUCKETS = [
    ("0-7d", 7),
    ("8-14d", 14),
    ("15-30d", 30),
    ("30d+", None),
]

CYCLE_TIME_PERCENTILES = (0.5, 0.85)
