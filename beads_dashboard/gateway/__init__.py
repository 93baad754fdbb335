"""
Gateway to the external bd CLI that owns all writes to the issue log.
"""

from .bd import BeadsCommand, BeadsCommandError, is_valid_issue_id

__all__ = ["BeadsCommand", "BeadsCommandError", "is_valid_issue_id"]
