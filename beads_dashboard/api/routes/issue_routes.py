#!/usr/bin/env python3
"""
Issue Routes - Create and update issues through the bd CLI

Every successful mutation flushes bd to issues.jsonl and then pushes a
refresh event to connected dashboards.
"""

import logging
from typing import Awaitable, List

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request

from ..dependencies import DashboardDependencies
from ..schemas import (
    CreateIssueRequest,
    UpdateDescriptionRequest,
    UpdateIssueRequest,
    UpdatePriorityRequest,
    UpdateStatusRequest,
    is_valid_priority,
    is_valid_status,
)
from ...core.audit import audit_logger
from ...gateway.bd import BeadsCommandError, is_valid_issue_id
from ...store.models import CREATABLE_ISSUE_TYPES, IssueStatus, IssueType

logger = logging.getLogger("beads_dashboard.server")

VALID_ISSUE_TYPES = {issue_type.value for issue_type in IssueType}
CREATABLE_TYPE_VALUES = {issue_type.value for issue_type in CREATABLE_ISSUE_TYPES}

# PATCH fields written with `--<flag>=<value>`
SIMPLE_FIELD_FLAGS = {
    "title": "title",
    "issue_type": "type",
    "assignee": "assignee",
    "external_ref": "external-ref",
    "estimate": "estimate",
}

# PATCH fields whose empty value clears the field in bd
CLEARABLE_FIELD_FLAGS = {
    "parent_id": "parent",
    "due": "due",
    "defer": "defer",
}

# PATCH fields passed through a temp file
FILE_FIELD_FLAGS = {
    "design": "design-file",
    "acceptance_criteria": "acceptance-criteria-file",
    "notes": "notes-file",
}


def _require_valid_id(issue_id: str) -> None:
    if not is_valid_issue_id(issue_id):
        raise HTTPException(status_code=400, detail="Invalid issue ID format")


def create_issue_routes(deps: DashboardDependencies) -> APIRouter:
    """Create issue mutation routes."""
    router = APIRouter()

    @router.post("/api/issues/{issue_id}")
    async def update_description(issue_id: str, body: UpdateDescriptionRequest,
                                 request: Request, background_tasks: BackgroundTasks):
        """Update issue description via `bd update --body-file`."""
        _require_valid_id(issue_id)
        if body.description is None:
            raise HTTPException(status_code=400, detail="Description is required")

        try:
            await deps.bd.update_description(deps.project_root, issue_id, body.description)
        except BeadsCommandError as e:
            logger.error(f"update_description failed for {issue_id}: {e}")
            audit_logger.issue_mutation("update_description", issue_id, False, {"error": str(e)}, request)
            raise HTTPException(status_code=500, detail=str(e))

        await deps.bd.sync(deps.project_root)
        audit_logger.issue_mutation("update_description", issue_id, True, {}, request)
        background_tasks.add_task(deps.broadcaster.broadcast_refresh)
        return {"success": True}

    @router.post("/api/issues/{issue_id}/status")
    async def update_status(issue_id: str, body: UpdateStatusRequest,
                            request: Request, background_tasks: BackgroundTasks):
        """Update issue status via `bd update --status`."""
        _require_valid_id(issue_id)
        if not body.status:
            raise HTTPException(status_code=400, detail="Status is required")
        if not is_valid_status(body.status):
            raise HTTPException(status_code=400, detail="Invalid status value")

        try:
            await deps.bd.update_status(deps.project_root, issue_id, body.status)
        except BeadsCommandError as e:
            logger.error(f"update_status failed for {issue_id}: {e}")
            audit_logger.issue_mutation("update_status", issue_id, False, {"error": str(e)}, request)
            raise HTTPException(status_code=500, detail=str(e))

        await deps.bd.sync(deps.project_root)
        audit_logger.issue_mutation("update_status", issue_id, True, {"status": body.status}, request)
        background_tasks.add_task(deps.broadcaster.broadcast_refresh)
        return {"success": True}

    @router.post("/api/issues/{issue_id}/priority")
    async def update_priority(issue_id: str, body: UpdatePriorityRequest,
                              request: Request, background_tasks: BackgroundTasks):
        """Update issue priority via `bd update --priority`."""
        _require_valid_id(issue_id)
        if body.priority is None:
            raise HTTPException(status_code=400, detail="Priority is required")
        if not is_valid_priority(body.priority):
            raise HTTPException(status_code=400, detail="Invalid priority value (must be 0-4)")

        try:
            await deps.bd.update_priority(deps.project_root, issue_id, body.priority)
        except BeadsCommandError as e:
            logger.error(f"update_priority failed for {issue_id}: {e}")
            audit_logger.issue_mutation("update_priority", issue_id, False, {"error": str(e)}, request)
            raise HTTPException(status_code=500, detail=str(e))

        await deps.bd.sync(deps.project_root)
        audit_logger.issue_mutation("update_priority", issue_id, True, {"priority": body.priority}, request)
        background_tasks.add_task(deps.broadcaster.broadcast_refresh)
        return {"success": True}

    @router.patch("/api/issues/{issue_id}")
    async def update_issue(issue_id: str, body: UpdateIssueRequest,
                           request: Request, background_tasks: BackgroundTasks):
        """
        Update several fields at once.

        Each field is a separate bd call; failures are collected and reported
        together instead of aborting the remaining fields.
        """
        _require_valid_id(issue_id)
        updates = body.model_dump(exclude_unset=True)
        logger.debug(f"PATCH /api/issues/{issue_id}: {sorted(updates)}")

        if not updates:
            raise HTTPException(status_code=400, detail="No fields to update")
        if "status" in updates and not is_valid_status(updates["status"]):
            raise HTTPException(status_code=400, detail="Invalid status value")
        if "priority" in updates and not is_valid_priority(updates["priority"]):
            raise HTTPException(status_code=400, detail="Invalid priority value (must be 0-4)")
        if "issue_type" in updates and updates["issue_type"] not in VALID_ISSUE_TYPES:
            raise HTTPException(status_code=400, detail="Invalid issue type")
        if updates.get("parent_id") and not is_valid_issue_id(updates["parent_id"]):
            raise HTTPException(status_code=400, detail="Invalid parent issue ID format")

        root = deps.project_root
        errors: List[str] = []

        async def attempt(label: str, call: Awaitable[None]) -> None:
            try:
                await call
            except BeadsCommandError as e:
                errors.append(f"{label}: {e}")

        for field, flag in SIMPLE_FIELD_FLAGS.items():
            if updates.get(field) is not None:
                await attempt(field, deps.bd.update_field(root, issue_id, flag, updates[field]))

        if updates.get("status") is not None:
            await attempt("status", deps.bd.update_status(root, issue_id, updates["status"]))

        if updates.get("priority") is not None:
            await attempt("priority", deps.bd.update_priority(root, issue_id, updates["priority"]))

        if updates.get("description") is not None:
            await attempt("description", deps.bd.update_description(root, issue_id, updates["description"]))

        if updates.get("labels") is not None:
            current = await deps.find_issue(issue_id)
            if current is not None:
                current_labels = set(current.labels)
                new_labels = set(updates["labels"])
                for label in sorted(new_labels - current_labels):
                    await attempt(f"label add '{label}'", deps.bd.add_label(root, issue_id, label))
                for label in sorted(current_labels - new_labels):
                    await attempt(f"label remove '{label}'", deps.bd.remove_label(root, issue_id, label))

        for field, flag in CLEARABLE_FIELD_FLAGS.items():
            if field in updates:
                await attempt(field, deps.bd.update_field(root, issue_id, flag, updates[field] or ""))

        # A defer date hides the issue; mark it deferred unless a status was given
        if updates.get("defer") and "status" not in updates:
            await attempt("defer", deps.bd.update_status(root, issue_id, IssueStatus.DEFERRED.value))

        for field, flag in FILE_FIELD_FLAGS.items():
            if updates.get(field) is not None:
                await attempt(field, deps.bd.update_via_file(root, issue_id, flag, updates[field]))

        await deps.bd.sync(root)
        audit_logger.issue_mutation(
            "update", issue_id, not errors, {"fields": sorted(updates), "errors": errors}, request
        )
        background_tasks.add_task(deps.broadcaster.broadcast_refresh)

        if errors:
            return {"success": False, "error": f"Some fields failed to update: {'; '.join(errors)}"}
        return {"success": True}

    @router.post("/api/issues")
    async def create_issue(body: CreateIssueRequest, request: Request, background_tasks: BackgroundTasks):
        """Create a new issue via `bd create`."""
        if not body.title.strip():
            raise HTTPException(status_code=400, detail="Title is required")

        issue_type = body.issue_type or IssueType.TASK.value
        if issue_type not in CREATABLE_TYPE_VALUES:
            raise HTTPException(status_code=400, detail="Invalid issue type")

        priority = body.priority if body.priority is not None else 2
        if not is_valid_priority(priority):
            raise HTTPException(status_code=400, detail="Invalid priority value (must be 0-4)")

        root = deps.project_root
        try:
            issue_id = await deps.bd.create_issue(root, body.title, issue_type, priority)
        except BeadsCommandError as e:
            logger.error(f"create failed: {e}")
            audit_logger.issue_mutation("create", None, False, {"error": str(e)}, request)
            raise HTTPException(status_code=500, detail=str(e))

        if body.description and body.description.strip() and issue_id and is_valid_issue_id(issue_id):
            try:
                await deps.bd.update_description(root, issue_id, body.description)
            except BeadsCommandError as e:
                # Issue exists already; only the description is missing
                logger.error(f"Failed to set description on {issue_id}: {e}")

        await deps.bd.sync(root)
        audit_logger.issue_mutation("create", issue_id, True, {"type": issue_type, "priority": priority}, request)
        background_tasks.add_task(deps.broadcaster.broadcast_refresh)
        return {"success": True, "id": issue_id}

    return router
