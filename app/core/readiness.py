# app/core/readiness.py
import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


class Readiness:
    """Tracks whether the database is usable. One instance lives on ``app.state``."""

    def __init__(self) -> None:
        self.database_connected = False
        self.last_error: Optional[str] = None
        self.changed_at: Optional[datetime] = None

    def mark_ready(self) -> None:
        self.database_connected = True
        self.last_error = None
        self.changed_at = datetime.utcnow()
        logger.info("Database connection established")

    def mark_failed(self, error: str) -> None:
        self.database_connected = False
        self.last_error = error
        self.changed_at = datetime.utcnow()
        logger.error(f"Database connection failed: {error}")

    @property
    def database_status(self) -> str:
        return "connected" if self.database_connected else "disconnected"
