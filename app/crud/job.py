"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import Any, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import execute_positional, positional_text
from app.core.errors import BadRequestError, DuplicateError, NotFoundError
from app.core.sql import sql_for_job_filters, sql_for_partial_update
from app.crud.base import check_update_data
from app.models.company import Company
from app.models.job import Job
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

# Fields a job update may touch; id and company are fixed at creation
UPDATABLE_FIELDS = ("title", "salary", "equity")


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If the company does not exist
        DuplicateError: If the company already has a job with this title
    """
    if not db.query(Company).filter(Company.handle == job_data.company_handle).first():
        raise BadRequestError(f"No company: {job_data.company_handle}")

    duplicate = db.query(Job).filter(
        Job.title == job_data.title,
        Job.company_handle == job_data.company_handle,
    ).first()
    if duplicate:
        raise DuplicateError(
            f"Duplicate job: {job_data.title}, at company: {job_data.company_handle}"
        )

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    job = get_by_id(db, job_id)
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def find(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Job]:
    """
    List jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        filters: Any of title (substring, case-insensitive), minSalary,
            hasEquity ("true"/"false"). Empty or None lists every job.

    Raises:
        UnrecognizedFilterKeyError: Unknown key or bad value
    """
    where, values = sql_for_job_filters(filters or {})

    sql = "SELECT * FROM jobs"
    if where:
        sql += f" WHERE {where}"
    sql += " ORDER BY title, id"

    return db.query(Job).from_statement(positional_text(db, sql, values)).all()


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Job:
    """
    Partially update a job; only the supplied fields change.

    Args:
        data: Any of title, salary, equity

    Raises:
        EmptyUpdateError: If data is empty
        BadRequestError: If data names a field that cannot be updated, or
            sets title to null
        NotFoundError: If the job does not exist
    """
    check_update_data("job", data, UPDATABLE_FIELDS, required=("title",))

    set_cols, values = sql_for_partial_update(data, {})
    id_idx = len(values) + 1

    result = execute_positional(
        db,
        f"UPDATE jobs SET {set_cols} WHERE id = ${id_idx}",
        [*values, job_id],
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return get(db, job_id)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    job = get(db, job_id)

    db.delete(job)
    db.commit()

    logger.info(f"Deleted job {job_id}")
