from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import BaseModel, Field
from app.config.database import get_db
from app.features.content.service import list_sections

router = APIRouter(tags=["Content"])

class SystemResponse(BaseModel):
    id: int
    section_id: int
    title: str
    description: Optional[str]
    url: Optional[str]
    icon: Optional[str]
    color: Optional[str]
    sort_order: int
    image_filename: Optional[str]

    class Config:
        from_attributes = True

class SectionResponse(BaseModel):
    id: int
    title: str
    icon: Optional[str]
    sort_order: int
    items: List[SystemResponse] = Field(validation_alias="systems")

    class Config:
        from_attributes = True

@router.get("/data", response_model=List[SectionResponse])
def get_all_content(db: Session = Depends(get_db)):
    return list_sections(db)
