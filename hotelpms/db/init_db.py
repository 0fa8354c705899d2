"""Create tables for the configured database."""
import logging

from sqlalchemy.engine import Engine

from hotelpms.models import Base

logger = logging.getLogger(__name__)


def init_db(bind: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured", extra={"url": str(bind.url)})
