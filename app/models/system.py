from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.config.database import Base

class System(Base):
    __tablename__ = "systems"

    id = Column(Integer, primary_key=True, index=True)
    section_id = Column(Integer, ForeignKey("sections.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String, nullable=True)
    # Only one visual is active: an icon name or an uploaded thumbnail
    icon = Column(String, nullable=True)
    image_filename = Column(String, nullable=True)
    color = Column(String, nullable=True) # Gradient token, e.g. "from-blue-500 to-cyan-500"
    sort_order = Column(Integer, nullable=False, default=0)

    section = relationship("Section", back_populates="systems")
