from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.config.database import Base

class Section(Base):
    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    icon = Column(String, nullable=True) # Icon name picked in the admin panel
    sort_order = Column(Integer, nullable=False, default=1)

    systems = relationship(
        "System",
        back_populates="section",
        order_by="[System.sort_order, System.id]",
        cascade="all, delete-orphan",
    )
