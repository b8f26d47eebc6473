from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from pydantic import BaseModel
from app.config.database import get_db
from app.features.sections import service

router = APIRouter(prefix="/sections", tags=["Sections"])

class SectionCreate(BaseModel):
    title: str
    icon: Optional[str] = None

class SectionUpdate(BaseModel):
    title: Optional[str] = None
    icon: Optional[str] = None

@router.post("")
def create_section(section: SectionCreate, db: Session = Depends(get_db)):
    return {"id": service.create_section(db, section.title, section.icon)}

@router.put("/{section_id}")
def update_section(section_id: int, section: SectionUpdate, db: Session = Depends(get_db)):
    changes = service.update_section(db, section_id, section.model_dump(exclude_unset=True))
    return {"changes": changes}

@router.delete("/{section_id}")
def delete_section(section_id: int, db: Session = Depends(get_db)):
    return {"changes": service.delete_section(db, section_id)}
