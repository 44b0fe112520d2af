import enum

from sqlalchemy import Column, Integer, String, Text, Enum, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pathforge.database import Base
from pathforge.models.types import UTCDateTime


class JobStatus(str, enum.Enum):
    """Board columns, in display order."""
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    company = Column(String(100), nullable=False)
    location = Column(String(100), nullable=False)
    status = Column(
        Enum(JobStatus, values_callable=lambda e: [m.value for m in e], validate_strings=True),
        default=JobStatus.APPLIED,
        nullable=False,
        index=True,
    )
    salary = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    requirements = Column(JSON, nullable=False, default=list)

    applied_date = Column(UTCDateTime(), server_default=func.now(), nullable=False)
    created_at = Column(UTCDateTime(), server_default=func.now(), nullable=False)
    updated_at = Column(UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", back_populates="jobs")

    def __repr__(self):
        return f"<Job {self.id} {self.title!r} @ {self.company!r} ({self.status.value})>"
