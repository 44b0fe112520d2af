# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, job

# Explicit class exports for cleaner imports
from .user import User
from .job import Job, JobStatus

__all__ = [
    "User",
    "Job",
    "JobStatus",
]
