from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from pathforge.core.schemas import MessageResponse
from pathforge.database import get_db
from pathforge.models.user import User
from pathforge.routers.auth_deps import get_current_user
from pathforge.schemas.job import JobCreate, JobUpdate, JobResponse
from pathforge.services.jobs import JobService

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)


@router.get("", response_model=List[JobResponse])
def list_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List the caller's job applications, newest first.
    """
    return JobService(db).list_for_owner(current_user)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_in: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Track a new job application. Status defaults to "applied".
    """
    return JobService(db).create(job_in, current_user)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return JobService(db).get_owned(job_id, current_user)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    job_in: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Partially update a job application. A board drag sends only ``status``.
    """
    return JobService(db).update(job_id, job_in, current_user)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    JobService(db).delete(job_id, current_user)
    return MessageResponse(message="Job application deleted successfully")
