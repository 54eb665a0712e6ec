import logging

from database import Base, engine, init_models

logger = logging.getLogger(__name__)


def create_tables():
    """Create any missing tables. Existing tables and data are left alone."""
    init_models()
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready on {engine.url.render_as_string(hide_password=True)}")
