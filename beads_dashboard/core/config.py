#!/usr/bin/env python3
"""
Beads Dashboard Configuration Management

Resolution order:
1. -c/--config path given on the command line
2. BEADS_DASHBOARD_CONFIG environment variable (.env is honoured)
3. ./config.yaml (if exists)
4. Defaults

Command line arguments override whatever the file provides.
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger("beads_dashboard.config")

CONFIG_ENV_VAR = "BEADS_DASHBOARD_CONFIG"
DEFAULT_CONFIG_FILE = "config.yaml"


class DashboardConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(3000, ge=1, le=65535)
    log_level: str = "INFO"
    # Project layout
    project_root: str = "."
    beads_dir_name: str = ".beads"
    issues_file_name: str = "issues.jsonl"
    registry_path: str = "~/.beads/registry.json"
    # External bd CLI
    bd_executable: str = "bd"
    command_timeout: float = Field(30.0, gt=0)
    # Live refresh
    watch_enabled: bool = True
    debounce_ms: int = Field(100, ge=0)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    def resolved_project_root(self) -> Path:
        return Path(self.project_root).expanduser().resolve()

    def override_with_args(self, args: argparse.Namespace) -> "DashboardConfig":
        """Override config with command line arguments if provided"""
        updates = {}
        for name in ("project_root", "host", "port", "log_level"):
            value = getattr(args, name, None)
            if value is not None:
                updates[name] = value
        if getattr(args, "no_watch", False):
            updates["watch_enabled"] = False
        return self.model_copy(update=updates)


def load_config_from(path: str) -> DashboardConfig:
    """Load dashboard configuration from YAML file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return DashboardConfig(**data)


def load_config(config_path: Optional[str] = None) -> DashboardConfig:
    """
    Load configuration following the resolution order above.

    An explicit path that cannot be read is an error; an unreadable fallback
    file is logged and skipped.
    """
    if config_path:
        logger.info(f"Loading configuration from: {config_path}")
        return load_config_from(config_path)

    load_dotenv()
    for candidate in (os.environ.get(CONFIG_ENV_VAR), DEFAULT_CONFIG_FILE):
        if not candidate or not Path(candidate).exists():
            continue
        try:
            logger.info(f"Loading configuration from: {candidate}")
            return load_config_from(candidate)
        except Exception as e:
            logger.warning(f"Failed to load config from {candidate}: {e}")

    logger.info("Using default configuration")
    return DashboardConfig()
