"""
Dashboard Controller

Prepares the template context for the dashboard page. All methods return
plain Python data structures that are easy to inspect and test.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..metrics import calculate_metrics
from ..metrics.models import AgingTier, MetricsSnapshot
from ..store.models import IssueRecord
from .config import SUMMARY_CARDS, format_card_value, tier_legend

logger = logging.getLogger("beads_dashboard.dashboard")


class DashboardController:
    """Builds dashboard page data from issue records."""

    def get_dashboard_data(self, issues: Sequence[IssueRecord], now: datetime,
                           project_root: Path) -> Dict[str, Any]:
        """
        Get all data needed for the dashboard page.

        Args:
            issues: Records of the active project
            now: Reference instant for ages
            project_root: Active project root, shown in the header

        Returns:
            Template context; `has_data` is False when there is nothing to chart
        """
        snapshot = calculate_metrics(issues, now)
        context = self._base_context(project_root)
        context["generated_at"] = now

        if snapshot is None:
            logger.debug(f"No metrics for {project_root}")
            return context

        context.update({
            "has_data": True,
            "cards": self._get_summary_cards(snapshot),
            "tier_counts": self._get_tier_counts(snapshot),
            "snapshot": snapshot.to_dict(),
            "total_records": len(issues),
            "priority_counts": self._get_priority_counts(issues),
        })
        return context

    def error_context(self, error: str, project_root: Path) -> Dict[str, Any]:
        context = self._base_context(project_root)
        context["error"] = error
        return context

    def _base_context(self, project_root: Path) -> Dict[str, Any]:
        return {
            "page_title": f"Beads Dashboard - {project_root.name}",
            "project_name": project_root.name,
            "project_root": str(project_root),
            "has_data": False,
            "cards": [],
            "tier_counts": {tier.value: 0 for tier in AgingTier},
            "tier_legend": tier_legend(),
            "snapshot": None,
            "total_records": 0,
            "priority_counts": [],
            "error": None,
        }

    def _get_summary_cards(self, snapshot: MetricsSnapshot) -> List[Dict[str, str]]:
        cards = []
        for card in SUMMARY_CARDS:
            value = getattr(snapshot, card["key"])
            cards.append({
                "label": card["label"],
                "value": format_card_value(value, card["unit"]),
            })
        return cards

    def _get_priority_counts(self, issues: Sequence[IssueRecord]) -> List[Dict[str, int]]:
        """Unfinished issues per priority, highest priority first."""
        counts: Dict[int, int] = {}
        for issue in issues:
            if issue.is_closed or issue.is_tombstone:
                continue
            counts[issue.priority] = counts.get(issue.priority, 0) + 1
        return [{"priority": p, "count": counts[p]} for p in sorted(counts)]

    def _get_tier_counts(self, snapshot: MetricsSnapshot) -> Dict[str, int]:
        counts = {tier.value: 0 for tier in AgingTier}
        for point in snapshot.aging_wip:
            counts[point.tier.value] += 1
        return counts
