"""Logging configuration."""

from __future__ import annotations

import logging

from flask import Flask


def configure_log_level(level_name: str) -> None:
    """Configure root logging for both the web app and console scripts."""

    level = getattr(logging, str(level_name or "INFO").upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # Reduce noisy loggers if needed
    logging.getLogger("werkzeug").setLevel(max(level, logging.WARNING))


def configure_logging(app: Flask) -> None:
    """Apply the app's ``LOG_LEVEL`` to root logging."""

    configure_log_level(str(app.config.get("LOG_LEVEL", "INFO")))
