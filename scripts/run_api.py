#!/usr/bin/env python3
"""
Start the payment relay with uvicorn.

Host and port come from config/relay_config.yml, overridden by HOST/PORT in the
environment (or .env), overridden again by the command line. --config exports RELAY_CONFIG_PATH so
the served app reads the same file:
  python scripts/run_api.py
  python scripts/run_api.py --port 8080 --reload
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from src.utils.config_loader import load_relay_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the payment relay API")
    parser.add_argument("--config", type=Path, default=None, help="Path to relay_config.yml")
    parser.add_argument("--host", default=None, help="Override listen host")
    parser.add_argument("--port", type=int, default=None, help="Override listen port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    if args.config is not None:
        # uvicorn imports the app by name, so the path reaches it through the environment
        os.environ["RELAY_CONFIG_PATH"] = str(args.config.resolve())
    cfg = load_relay_config(args.config)

    uvicorn.run(
        "src.api.main:app",
        host=args.host or cfg.server.host,
        port=args.port or cfg.server.port,
        reload=args.reload,
        log_level="debug" if args.verbose else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
