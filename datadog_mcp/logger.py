"""
stderr-only logger. stdout carries the MCP protocol and must stay clean.
"""

import logging
import os
import sys


LOG_FORMAT = "[%(levelname)s %(asctime)s] %(name)s: %(message)s"
DEFAULT_LEVEL = "INFO"


def get_logger(name: str) -> logging.Logger:
    """Get a logger that writes to stderr only"""
    logger = logging.getLogger(f"datadog_mcp.{name}")
    if logger.handlers:
        return logger

    level = os.environ.get("DATADOG_MCP_LOG_LEVEL", DEFAULT_LEVEL).upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    logger.addHandler(handler)

    # Never propagate to root (which might have stdout handlers)
    logger.propagate = False

    return logger
