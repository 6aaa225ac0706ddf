"""
User model - owner of a board (projects, activities, settings)
"""
from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from canvasflow.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
