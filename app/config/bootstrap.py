import logging
from app.config.database import Base, SessionLocal, engine
from app.config.settings import settings
from app.features.auth.service import ensure_default_admin
from app.features.content.service import seed_sample_content
from app.utils.assets import get_background_store, get_system_image_store

# Register models with Base.metadata
from app.models import admin, section, system  # noqa: F401

logger = logging.getLogger(__name__)

def bootstrap():
    """Create tables and asset directories, then seed the admin (and sample content). Idempotent."""
    Base.metadata.create_all(bind=engine)
    get_background_store().ensure_dir()
    get_system_image_store().ensure_dir()

    db = SessionLocal()
    try:
        ensure_default_admin(db, settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD)
        if settings.SEED_SAMPLE_CONTENT:
            seed_sample_content(db)
    except Exception:
        db.rollback()
        logger.exception("Bootstrap failed")
        raise
    finally:
        db.close()
