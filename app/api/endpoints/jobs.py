import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import TokenUser, get_admin_user
from app.crud import job as job_crud
from app.schemas.job import JobCreateRequest, JobResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Create a job posting for an existing company.

    Authorization required: admin
    """
    return job_crud.create(db, request)


@router.get("/", response_model=List[JobResponse])
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs ordered by title.

    Optional query filters:
    - title: case-insensitive substring of the job title
    - minSalary: lowest salary to include
    - hasEquity: true for jobs with equity > 0, false for jobs with none

    Any other query parameter is rejected with 400.
    """
    return job_crud.find(db, dict(request.query_params))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return job_crud.get(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Partially update a job: title, salary, equity.

    Authorization required: admin
    """
    return job_crud.update(db, job_id, request.to_update_data())


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: TokenUser = Depends(get_admin_user),
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
