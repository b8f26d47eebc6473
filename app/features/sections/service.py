import logging
from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.section import Section
from app.models.system import System
from app.utils.exceptions import StorageError

logger = logging.getLogger(__name__)

def create_section(db: Session, title: str, icon: Optional[str]) -> int:
    """Append a section after every existing one."""
    next_order = select(func.coalesce(func.max(Section.sort_order), 0) + 1).scalar_subquery()
    section = Section(title=title, icon=icon, sort_order=next_order)
    try:
        db.add(section)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not create section: %s", e)
        raise StorageError()
    return section.id

def update_section(db: Session, section_id: int, fields: dict) -> int:
    """Partial update of title/icon. Returns the number of rows changed."""
    values = {k: v for k, v in fields.items() if k in ("title", "icon")}
    if values.get("title", "") is None:
        del values["title"]
    if not values:
        return 0
    try:
        changes = db.query(Section).filter(Section.id == section_id).update(values, synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not update section %s: %s", section_id, e)
        raise StorageError()
    return changes

def delete_section(db: Session, section_id: int) -> int:
    """Delete a section and every system it owns in one transaction."""
    try:
        removed_systems = db.query(System).filter(System.section_id == section_id).delete(synchronize_session=False)
        changes = db.query(Section).filter(Section.id == section_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not delete section %s: %s", section_id, e)
        raise StorageError()
    if changes:
        logger.info("Deleted section %s with %d systems", section_id, removed_systems)
    return changes
