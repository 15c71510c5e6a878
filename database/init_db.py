import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from tenacity import retry, stop_after_attempt, wait_fixed, before_sleep_log

from database import database

logger = logging.getLogger(__name__)


@retry(
    stop=stop_after_attempt(5),
    wait=wait_fixed(2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True
)
def init_db(bind: Optional[Engine] = None) -> None:
    """Wait for the database to accept connections, then create missing tables."""
    engine = bind or database.engine
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    database.create_tables(engine)
    logger.info(f"Database initialized at {engine.url.render_as_string(hide_password=True)}")
