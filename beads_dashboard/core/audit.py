#!/usr/bin/env python3
"""
Beads Dashboard Audit Logger

Structured logging for every change the dashboard asks bd to make.
"""

import json
import logging
import time
from typing import Dict, Any, Optional
from fastapi import Request


class AuditLogger:
    """Centralized audit logging for mutating actions."""

    def __init__(self):
        self.logger = logging.getLogger("beads_dashboard.audit")

    def _log_event(self, event_type: str, details: Dict[str, Any], request: Optional[Request] = None):
        """Log a structured audit event."""
        audit_record = {
            "timestamp": int(time.time()),
            "event_type": event_type,
            "details": details
        }

        # Add request context if available
        if request:
            audit_record.update({
                "client_ip": request.client.host if request.client else "unknown",
                "method": request.method,
                "url": str(request.url)
            })

        # Log as JSON for structured parsing
        self.logger.info(json.dumps(audit_record, default=str))

    def issue_mutation(self, action: str, issue_id: Optional[str], success: bool,
                       details: Dict[str, Any], request: Optional[Request] = None):
        """Log an issue create/update routed through bd."""
        self._log_event(
            event_type="issue_mutation",
            details={
                "action": action,  # "create", "update_description", "update_status", ...
                "issue_id": issue_id,
                "success": success,
                **details
            },
            request=request
        )

    def project_switch(self, old_path: str, new_path: str, request: Optional[Request] = None):
        """Log a change of the active project."""
        self._log_event(
            event_type="project_switch",
            details={"from": old_path, "to": new_path},
            request=request
        )


# Global audit logger instance
audit_logger = AuditLogger()
