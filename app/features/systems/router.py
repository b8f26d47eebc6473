from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from typing import Optional
from pydantic import BaseModel
from app.config.database import get_db
from app.config.settings import settings
from app.features.systems import service
from app.utils.assets import AssetStore, get_system_image_store
from app.utils.exceptions import NoFileError, PayloadTooLargeError
from app.utils.images import intake_system_image

router = APIRouter(prefix="/systems", tags=["Systems"])

class SystemBase(BaseModel):
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    image_filename: Optional[str] = None

class SystemCreate(SystemBase):
    section_id: int

class SystemUpdate(SystemBase):
    pass

@router.post("/upload-image")
def upload_system_image(
    system_image: Optional[UploadFile] = File(None),
    store: AssetStore = Depends(get_system_image_store),
):
    if system_image is None:
        raise NoFileError("system_image")
    limit = settings.MAX_UPLOAD_BYTES
    if system_image.size is not None and system_image.size > limit:
        raise PayloadTooLargeError(limit)
    filename = intake_system_image(store, system_image.file, size=settings.THUMBNAIL_SIZE, max_bytes=limit)
    return {"message": "OK", "filename": filename}

@router.post("")
def create_system(
    system: SystemCreate,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_system_image_store),
):
    system_id = service.create_system(db, store, system.section_id, system.model_dump())
    return {"id": system_id}

@router.put("/{system_id}")
def update_system(
    system_id: int,
    system: SystemUpdate,
    db: Session = Depends(get_db),
    store: AssetStore = Depends(get_system_image_store),
):
    return {"changes": service.update_system(db, store, system_id, system.model_dump())}

@router.delete("/{system_id}")
def delete_system(system_id: int, db: Session = Depends(get_db)):
    return {"changes": service.delete_system(db, system_id)}
