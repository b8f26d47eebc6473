import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.system import System
from app.utils.assets import AssetStore
from app.utils.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

SYSTEM_FIELDS = ("title", "description", "url", "icon", "color", "image_filename")

def _resolve_visual(values: dict, image_store: AssetStore) -> dict:
    """An uploaded image wins over the icon name; only one visual is kept."""
    image = values.get("image_filename")
    if image:
        if not image_store.exists(image):
            raise ValidationError("Unknown system image", details={"image_filename": image})
        values["icon"] = None
    else:
        values["image_filename"] = None
    return values

def create_system(db: Session, image_store: AssetStore, section_id: int, fields: dict) -> int:
    values = _resolve_visual({k: fields.get(k) for k in SYSTEM_FIELDS}, image_store)
    # Systems are not appended like sections: sort_order always starts at 0
    system = System(section_id=section_id, sort_order=0, **values)
    try:
        db.add(system)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not create system in section %s: %s", section_id, e)
        raise StorageError()
    return system.id

def update_system(db: Session, image_store: AssetStore, system_id: int, fields: dict) -> int:
    """Overwrite every editable field. Returns the number of rows changed."""
    values = _resolve_visual({k: fields.get(k) for k in SYSTEM_FIELDS}, image_store)
    try:
        changes = db.query(System).filter(System.id == system_id).update(values, synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not update system %s: %s", system_id, e)
        raise StorageError()
    return changes

def delete_system(db: Session, system_id: int) -> int:
    try:
        changes = db.query(System).filter(System.id == system_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not delete system %s: %s", system_id, e)
        raise StorageError()
    return changes
