"""
Category model - two-level tree (top category -> children)
"""
import uuid

from sqlalchemy import Column, String, Integer, Boolean, Text, ForeignKey
from waveorder.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, default=lambda: uuid.uuid4().hex)
    business_id = Column(String, ForeignKey("businesses.id"), nullable=False, index=True)
    parent_id = Column(String, ForeignKey("categories.id"), nullable=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)
