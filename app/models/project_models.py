import uuid
import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    ForeignKey,
    JSON,
    Table,
    CheckConstraint,
    Enum as SAEnum,
    func,
)
from sqlalchemy.orm import relationship

from app.db.database import Base


class ProjectStatus(str, enum.Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"
    completed = "Completed"


# one row per (project, student) application; the composite key makes a
# duplicate apply impossible at the storage level
project_applications = Table(
    "project_applications",
    Base.metadata,
    Column(
        "project_id",
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "student_id",
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("applied_at", DateTime, server_default=func.now(), nullable=False),
)


class Project(Base):
    __tablename__ = "projects"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    tech_stack = Column(JSON, nullable=False, default=list)

    mentor_id = Column(
        String(36), ForeignKey("mentors.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status = Column(
        SAEnum(ProjectStatus, name="project_status"),
        nullable=False,
        default=ProjectStatus.pending,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    mentor = relationship("Mentor", back_populates="assigned_projects")
    students_applied = relationship(
        "Student",
        secondary=project_applications,
        back_populates="applied_projects",
    )
    submissions = relationship(
        "Submission",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Submission.id",
    )


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id = Column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    files = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    project = relationship("Project", back_populates="submissions")
    student = relationship("Student", back_populates="submissions")
    progress_updates = relationship(
        "ProgressUpdate",
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="ProgressUpdate.id",
    )


class ProgressUpdate(Base):
    __tablename__ = "progress_updates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(
        Integer, ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    percentage_completion = Column(Integer, nullable=True)
    milestones = Column(String, nullable=True)
    comments = Column(Text, nullable=True)

    submission = relationship("Submission", back_populates="progress_updates")

    __table_args__ = (
        CheckConstraint(
            "percentage_completion IS NULL OR "
            "(percentage_completion >= 0 AND percentage_completion <= 100)",
            name="ck_progress_percentage_range",
        ),
    )
