"""
Record store reader.

Reads .beads/issues.jsonl line by line into IssueRecord objects. Every line
is parsed on its own; a bad line is logged and skipped so the rest of the
file still loads.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Iterator, List, Union

from pydantic import ValidationError

from .models import IssueRecord

logger = logging.getLogger("beads_dashboard.reader")

BEADS_DIR_NAME = ".beads"
ISSUES_FILE_NAME = "issues.jsonl"


def beads_dir_path(project_root: Union[str, Path], beads_dir_name: str = BEADS_DIR_NAME) -> Path:
    return Path(project_root) / beads_dir_name


def issues_file_path(
    project_root: Union[str, Path],
    beads_dir_name: str = BEADS_DIR_NAME,
    issues_file_name: str = ISSUES_FILE_NAME,
) -> Path:
    return beads_dir_path(project_root, beads_dir_name) / issues_file_name


def beads_dir_exists(project_root: Union[str, Path], beads_dir_name: str = BEADS_DIR_NAME) -> bool:
    return beads_dir_path(project_root, beads_dir_name).is_dir()


def iter_issues(path: Union[str, Path]) -> Iterator[IssueRecord]:
    """
    Yield records from a JSON-lines file in file order.

    Args:
        path: Path to issues.jsonl

    Yields:
        One IssueRecord per non-blank, well-formed line
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"Issues file not found: {path}")
        return

    with open(path, "rb") as f:
        for line_number, raw_line in enumerate(f, start=1):
            if not raw_line.strip():
                continue
            try:
                data = json.loads(raw_line.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping malformed line {line_number} in {path.name}: {e}")
                continue

            if not isinstance(data, dict):
                logger.warning(f"Skipping line {line_number} in {path.name}: expected an object")
                continue

            try:
                yield IssueRecord.model_validate(data)
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid record on line {line_number} in {path.name} "
                    f"(id={data.get('id')!r}): {e.error_count()} validation error(s)"
                )


def read_issues(path: Union[str, Path]) -> List[IssueRecord]:
    """Read every record from the file; a missing file is an empty list."""
    return list(iter_issues(path))


async def read_issues_async(path: Union[str, Path]) -> List[IssueRecord]:
    """Read records in the default executor so the event loop keeps serving."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, read_issues, path)
