from __future__ import annotations

import logging

from mentorpath.config import get_settings

AUDIT_LOGGER_NAME = "mentorpath.audit"

_LOG_CONFIGURED = False


def get_audit_logger() -> logging.Logger:
    return logging.getLogger(AUDIT_LOGGER_NAME)


def configure_logging(level: str | None = None) -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # Repair audit lines stay visible under a quieter root level.
    get_audit_logger().setLevel(logging.INFO)
    _LOG_CONFIGURED = True
