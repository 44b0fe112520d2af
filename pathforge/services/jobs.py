from typing import List

from pathforge.core.exceptions import AccessDeniedError, NotFoundError
from pathforge.models.job import Job
from pathforge.models.user import User
from pathforge.schemas.job import JobCreate, JobUpdate
from pathforge.services.base import BaseService


class JobService(BaseService):
    """Job-application CRUD scoped to the owning user."""

    def list_for_owner(self, owner: User) -> List[Job]:
        return (
            self.db.query(Job)
            .filter(Job.owner_id == owner.id)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )

    def get_owned(self, job_id: int, owner: User) -> Job:
        """
        Fetch a job the caller is allowed to touch.

        Raises:
            NotFoundError: no job with this id exists.
            AccessDeniedError: the job belongs to another user.
        """
        job = self.db.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.owner_id != owner.id:
            self.log_warning(
                f"User {owner.id} attempted to access job {job_id} owned by {job.owner_id}",
                user_id=owner.id, job_id=job_id,
            )
            raise AccessDeniedError("Not authorized to modify this job")
        return job

    def create(self, job_in: JobCreate, owner: User) -> Job:
        data = job_in.model_dump(exclude_none=True)
        job = Job(**data, owner_id=owner.id)
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        self.log_info(f"Created job {job.id} for user {owner.id}", job_id=job.id, status=job.status.value)
        return job

    def update(self, job_id: int, job_in: JobUpdate, owner: User) -> Job:
        job = self.get_owned(job_id, owner)
        changes = job_in.model_dump(exclude_unset=True)
        previous_status = job.status
        for field, value in changes.items():
            setattr(job, field, value)
        self.db.commit()
        self.db.refresh(job)
        if "status" in changes and job.status != previous_status:
            self.log_info(
                f"Job {job.id} moved {previous_status.value} -> {job.status.value}",
                job_id=job.id,
            )
        return job

    def delete(self, job_id: int, owner: User) -> None:
        job = self.get_owned(job_id, owner)
        self.db.delete(job)
        self.db.commit()
        self.log_info(f"Deleted job {job_id} for user {owner.id}", job_id=job_id)
