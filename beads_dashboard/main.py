#!/usr/bin/env python3
"""
Beads Dashboard server entry point

Serves flow metrics for one beads project and pushes live refreshes when
.beads/issues.jsonl changes.
"""

import argparse
import logging

import uvicorn

from .core.config import load_config
from .core.server import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Beads flow metrics dashboard")
    parser.add_argument("project_root", nargs="?", default=None,
                        help="Project directory containing .beads (default: from config or cwd)")
    parser.add_argument("-c", "--config", help="Path to YAML config", default=None)
    parser.add_argument("--host", help="Bind address", default=None)
    parser.add_argument("--port", type=int, help="Port to listen on", default=None)
    parser.add_argument("--log-level", dest="log_level", help="Logging level (DEBUG, INFO, ...)", default=None)
    parser.add_argument("--no-watch", dest="no_watch", action="store_true",
                        help="Disable file watching (no live refresh on external changes)")
    return parser


def main(argv=None):
    """Main entry point for the dashboard server."""
    args = build_parser().parse_args(argv)

    # Load configuration, then let the command line win
    config = load_config(args.config).override_with_args(args)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("beads_dashboard.server")
    logger.info(f"Beads Dashboard running at http://{config.host}:{config.port}")

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, reload=False, access_log=False)


if __name__ == "__main__":
    main()
