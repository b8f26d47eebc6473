from fastapi import APIRouter, Depends, File, UploadFile
from typing import List, Optional
from app.config.settings import settings
from app.utils.assets import AssetStore, get_background_store
from app.utils.exceptions import NoFileError, PayloadTooLargeError
from app.utils.images import intake_background

router = APIRouter(prefix="/backgrounds", tags=["Backgrounds"])

@router.get("", response_model=List[str])
def list_backgrounds(store: AssetStore = Depends(get_background_store)):
    return store.list()

@router.post("/upload")
def upload_background(
    background: Optional[UploadFile] = File(None),
    store: AssetStore = Depends(get_background_store),
):
    if background is None:
        raise NoFileError("background")
    limit = settings.MAX_UPLOAD_BYTES
    if background.size is not None and background.size > limit:
        raise PayloadTooLargeError(limit)
    filename = intake_background(store, background.file, background.filename, max_bytes=limit)
    return {"message": "Image uploaded", "filename": filename}

# `path` so encoded separators reach the containment check instead of the router
@router.delete("/{filename:path}")
def delete_background(filename: str, store: AssetStore = Depends(get_background_store)):
    store.delete(filename)
    return {"message": "Deleted"}
