"""
Activity model - a card on the board, charted on the timeline while in progress
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from canvasflow.database import Base
import enum


class ActivityStatus(str, enum.Enum):
    TODO = "todo"
    DOING = "doing"
    FINISHED = "finished"


class Activity(Base):
    __tablename__ = "activities"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_activities_progress"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # NULL project means a private activity
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True)
    title = Column(String, nullable=False)
    status = Column(Enum(ActivityStatus, native_enum=False), nullable=False, default=ActivityStatus.TODO)
    start_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    duration_days = Column(Integer, nullable=True)  # NULL = open-ended
    progress = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    project = relationship("Project", back_populates="activities")
