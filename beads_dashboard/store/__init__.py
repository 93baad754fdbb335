"""
Record store access: issue records, the JSON-lines reader and the project registry.
"""

from .models import IssueRecord, IssueStatus, IssueType, IssueDependency, PRIORITY_LABELS
from .reader import (
    read_issues,
    read_issues_async,
    iter_issues,
    issues_file_path,
    beads_dir_path,
    beads_dir_exists,
)
from .registry import BeadsProject, RegistryEntry, get_projects, read_registry, is_valid_project

__all__ = [
    'IssueRecord',
    'IssueStatus',
    'IssueType',
    'IssueDependency',
    'PRIORITY_LABELS',
    'read_issues',
    'read_issues_async',
    'iter_issues',
    'issues_file_path',
    'beads_dir_path',
    'beads_dir_exists',
    'BeadsProject',
    'RegistryEntry',
    'get_projects',
    'read_registry',
    'is_valid_project',
]
