#!/usr/bin/env python3
"""
bd CLI gateway

All issue mutations go through the external `bd` command. Arguments are
passed as an argv list (no shell), long text goes through temporary files.
"""

import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger("beads_dashboard.gateway")

ISSUE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,99}$")
CREATED_ISSUE_PATTERN = re.compile(r"Created issue:\s*(\S+)", re.IGNORECASE)


class BeadsCommandError(Exception):
    """A bd invocation failed, timed out or could not be started."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


def is_valid_issue_id(issue_id: str) -> bool:
    return bool(issue_id) and ISSUE_ID_PATTERN.match(issue_id) is not None


class BeadsCommand:
    """Async wrapper around the bd executable for one project root at a time."""

    def __init__(self, executable: str = "bd", timeout: float = 30.0):
        self.executable = executable
        self.timeout = timeout

    async def run(self, args: List[str], cwd: Union[str, Path]) -> str:
        """
        Run `bd <args>` in cwd.

        Returns:
            Decoded stdout

        Raises:
            BeadsCommandError: on non-zero exit, timeout or missing executable
        """
        cmd = [self.executable, *args]
        logger.debug(f"Running {cmd} in {cwd}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise BeadsCommandError(f"{self.executable} executable not found")
        except OSError as e:
            raise BeadsCommandError(f"failed to start {self.executable}: {e}")

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise BeadsCommandError(f"{' '.join(cmd[:3])} timed out after {self.timeout}s")

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() or f"exit status {process.returncode}"
            logger.error(f"exec error: {' '.join(cmd[:3])}: {message}")
            raise BeadsCommandError(message, returncode=process.returncode)

        return stdout.decode(errors="replace")

    async def _run_with_file(self, args: List[str], flag: str, content: str, cwd: Union[str, Path]) -> str:
        """Write content to a temp file and pass it as `--<flag>=<file>`."""
        fd, temp_path = tempfile.mkstemp(prefix=f"{flag.replace('-', '_')}-", suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            return await self.run([*args, f"--{flag}={temp_path}"], cwd)
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)

    async def update_description(self, cwd: Union[str, Path], issue_id: str, description: str) -> None:
        await self._run_with_file(["update", issue_id], "body-file", description, cwd)

    async def update_status(self, cwd: Union[str, Path], issue_id: str, status: str) -> None:
        await self.run(["update", issue_id, f"--status={status}"], cwd)

    async def update_priority(self, cwd: Union[str, Path], issue_id: str, priority: int) -> None:
        await self.run(["update", issue_id, f"--priority={priority}"], cwd)

    async def update_field(self, cwd: Union[str, Path], issue_id: str, flag: str, value: object) -> None:
        """Single-value update, e.g. flag="title" -> `bd update <id> --title=<value>`."""
        await self.run(["update", issue_id, f"--{flag}={value}"], cwd)

    async def update_via_file(self, cwd: Union[str, Path], issue_id: str, flag: str, content: str) -> None:
        """Long-text update, e.g. flag="notes-file"."""
        await self._run_with_file(["update", issue_id], flag, content, cwd)

    async def add_label(self, cwd: Union[str, Path], issue_id: str, label: str) -> None:
        await self.run(["label", issue_id, "add", label], cwd)

    async def remove_label(self, cwd: Union[str, Path], issue_id: str, label: str) -> None:
        await self.run(["label", issue_id, "remove", label], cwd)

    async def create_issue(self, cwd: Union[str, Path], title: str, issue_type: str, priority: int) -> Optional[str]:
        """
        Create an issue.

        Returns:
            The new issue id parsed from `Created issue: <id>`, or None if bd
            printed something else
        """
        output = await self.run(
            ["create", f"--title={title}", f"--type={issue_type}", f"--priority={priority}"], cwd
        )
        match = CREATED_ISSUE_PATTERN.search(output)
        return match.group(1) if match else None

    async def sync(self, cwd: Union[str, Path]) -> bool:
        """Flush pending changes to issues.jsonl. Failures are logged, not raised."""
        try:
            await self.run(["sync", "--flush-only"], cwd)
            return True
        except BeadsCommandError as e:
            logger.error(f"sync error: {e}")
            return False
