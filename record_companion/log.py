"""
Logging configuration for the command line tool.

The library itself only creates module loggers; the CLI decides where
records go.
"""

from __future__ import annotations

import logging
import logging.config


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging with a concise console handler.

    Args:
        level: Logging level name (e.g., "DEBUG", "INFO", "WARNING")
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(levelname)s | %(name)s | %(message)s",
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "level": level,
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger with the given name, or the root logger."""
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
