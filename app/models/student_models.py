import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.database import Base
from app.models.project_models import project_applications


class Student(Base):
    __tablename__ = "students"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    name = Column(String, nullable=False)
    roll_no = Column(String, unique=True, nullable=False)
    course = Column(String, nullable=False)
    section = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)

    assigned_mentor_id = Column(
        String(36), ForeignKey("mentors.id", ondelete="SET NULL"), nullable=True
    )

    # { project_id: "Applied" | "In Progress" | ... }
    project_status = Column(JSON, nullable=False, default=dict)
    # free-form profile data
    profile = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assigned_mentor = relationship("Mentor", back_populates="students")
    applied_projects = relationship(
        "Project",
        secondary=project_applications,
        back_populates="students_applied",
    )
    submissions = relationship(
        "Submission",
        back_populates="student",
        cascade="all, delete-orphan",
    )
