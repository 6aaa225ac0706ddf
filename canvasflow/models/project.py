"""
Project model - colored tag grouping activities on the board
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from canvasflow.database import Base


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        # One palette color per project within a user's board
        UniqueConstraint("user_id", "color", name="uq_projects_user_color"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    activities = relationship(
        "Activity",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
