import uuid
from sqlalchemy import Column, String, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.database import Base


class Mentor(Base):
    __tablename__ = "mentors"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    expertise = Column(Text, nullable=True)
    # free-form profile data
    profile = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # projects.mentor_id is the only place the assignment is stored
    assigned_projects = relationship("Project", back_populates="mentor")
    students = relationship("Student", back_populates="assigned_mentor")
