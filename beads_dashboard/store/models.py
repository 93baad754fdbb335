#!/usr/bin/env python3
"""
Beads Record Models - Pydantic models for lines of .beads/issues.jsonl
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger("beads_dashboard.reader")

DEFAULT_PRIORITY = 2


class IssueStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    CLOSED = "closed"
    TOMBSTONE = "tombstone"
    DEFERRED = "deferred"
    PINNED = "pinned"
    HOOKED = "hooked"


class IssueType(str, Enum):
    TASK = "task"
    BUG = "bug"
    FEATURE = "feature"
    EPIC = "epic"
    CHORE = "chore"
    # Extended types written by newer bd releases
    MERGE_REQUEST = "merge-request"
    MOLECULE = "molecule"
    GATE = "gate"
    AGENT = "agent"
    ROLE = "role"
    RIG = "rig"
    CONVOY = "convoy"
    EVENT = "event"
    SLOT = "slot"


# Types accepted by `bd create` from the dashboard
CREATABLE_ISSUE_TYPES = (
    IssueType.TASK, IssueType.BUG, IssueType.FEATURE, IssueType.EPIC, IssueType.CHORE
)

_STATUS_VALUES = {status.value for status in IssueStatus}
_TYPE_VALUES = {issue_type.value for issue_type in IssueType}

PRIORITY_LABELS = {
    0: "Critical",
    1: "High",
    2: "Medium",
    3: "Low",
    4: "Lowest",
}


class IssueDependency(BaseModel):
    model_config = ConfigDict(extra="allow")

    issue_id: str
    depends_on_id: str
    type: str = "blocks"
    created_at: Optional[str] = None
    created_by: Optional[str] = None


class IssueRecord(BaseModel):
    """
    One line of issues.jsonl.

    Only `id` and `created_at` are required. Fields the dashboard does not know
    about are kept so raw records can be served back unchanged.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    title: str = ""
    description: Optional[str] = None
    status: IssueStatus = IssueStatus.OPEN
    issue_type: IssueType = IssueType.TASK
    priority: int = Field(DEFAULT_PRIORITY, ge=0, le=4)
    created_at: datetime
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    assignee: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    dependencies: List[IssueDependency] = Field(default_factory=list)
    blocked_by: List[str] = Field(default_factory=list)
    parent_id: Optional[str] = None
    due: Optional[datetime] = None
    defer: Optional[datetime] = None
    design: Optional[str] = None
    acceptance_criteria: Optional[str] = None
    notes: Optional[str] = None
    external_ref: Optional[str] = None
    estimate: Optional[int] = None
    created_by: Optional[str] = None

    @field_validator("updated_at", "closed_at", "due", "defer", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("labels", "blocked_by", "dependencies", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _unknown_status_as_open(cls, value: Any) -> Any:
        # Statuses from newer bd releases still count as unfinished work
        if isinstance(value, IssueStatus):
            return value
        if not isinstance(value, str) or value not in _STATUS_VALUES:
            logger.debug(f"Unknown status {value!r}, treating as open")
            return IssueStatus.OPEN
        return value

    @field_validator("issue_type", mode="before")
    @classmethod
    def _unknown_type_as_task(cls, value: Any) -> Any:
        if isinstance(value, IssueType):
            return value
        if not isinstance(value, str) or value not in _TYPE_VALUES:
            return IssueType.TASK
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _clamp_priority(cls, value: Any) -> Any:
        # Out-of-range values are clamped, unreadable ones fall back to the default
        try:
            priority = int(value)
        except (TypeError, ValueError, OverflowError):
            return DEFAULT_PRIORITY
        return min(max(priority, 0), 4)

    @field_validator("created_at", "updated_at", "closed_at", "due", "defer")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Keep the written offset (calendar dates are read from it), default naive to UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_closed(self) -> bool:
        return self.status == IssueStatus.CLOSED

    @property
    def is_tombstone(self) -> bool:
        return self.status == IssueStatus.TOMBSTONE

    @property
    def display_title(self) -> str:
        return self.title or self.id

    def to_dict(self) -> dict:
        """Serialize for the JSON API, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)
