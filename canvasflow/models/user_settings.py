"""
Per-user board settings - branding and UI language
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from canvasflow.database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    company_name = Column(String, nullable=True)
    brand_color = Column(String, nullable=True)
    language = Column(String, nullable=False, default="en")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
