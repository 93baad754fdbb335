#!/usr/bin/env python3
"""
Beads Dashboard API Schemas - Pydantic Models for Request Validation
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..store.models import IssueStatus


class UpdateDescriptionRequest(BaseModel):
    description: Optional[str] = None


class UpdateStatusRequest(BaseModel):
    status: Optional[str] = None


class UpdatePriorityRequest(BaseModel):
    priority: Optional[int] = None


class UpdateIssueRequest(BaseModel):
    """PATCH body - every field optional, only provided fields are sent to bd."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    issue_type: Optional[str] = None
    priority: Optional[int] = None
    assignee: Optional[str] = None
    labels: Optional[List[str]] = None
    parent_id: Optional[str] = None
    external_ref: Optional[str] = None
    estimate: Optional[int] = None
    due: Optional[str] = None
    defer: Optional[str] = None
    design: Optional[str] = None
    acceptance_criteria: Optional[str] = None
    notes: Optional[str] = None


class CreateIssueRequest(BaseModel):
    title: str = ""
    description: Optional[str] = None
    issue_type: Optional[str] = None
    priority: Optional[int] = None


class SwitchProjectRequest(BaseModel):
    path: str = ""


VALID_STATUSES = {status.value for status in IssueStatus}


def is_valid_status(status: Optional[str]) -> bool:
    return status in VALID_STATUSES


def is_valid_priority(priority: Optional[int]) -> bool:
    return isinstance(priority, int) and not isinstance(priority, bool) and 0 <= priority <= 4


def parse_now(value: Optional[str]) -> Optional[datetime]:
    """Parse the optional ?now= reference instant; None means wall clock."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
