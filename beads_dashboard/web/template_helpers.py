#!/usr/bin/env python3
"""
Template Helpers for Beads Dashboard
"""

from datetime import datetime

from ..dashboard.config import get_priority_label


def format_days(days):
    """Format a day count (e.g. 3 -> '3d', 1.25 -> '1.2d')."""
    if days is None or days == '':
        return "—"
    try:
        value = float(days)
    except (ValueError, TypeError):
        return str(days)
    if value.is_integer():
        return f"{int(value)}d"
    return f"{value:.1f}d"


def format_date(value):
    """Format a date, datetime or ISO string as YYYY-MM-DD."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d")


def format_datetime(value):
    """Format a datetime or ISO string as full datetime string."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d %H:%M:%S")


def priority_label(priority):
    return get_priority_label(priority)


def setup_template_filters(templates):
    """Setup all template filters in Jinja2 environment."""
    templates.env.filters['format_days'] = format_days
    templates.env.filters['format_date'] = format_date
    templates.env.filters['format_datetime'] = format_datetime
    templates.env.filters['priority_label'] = priority_label
