"""
CRUD operations for the Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import execute_positional
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import sql_for_partial_update
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

VALID_FILTERS = ("title", "minSalary", "hasEquity")

_JOB_COLUMNS = [
    Job.__table__.c.id,
    Job.__table__.c.title,
    Job.__table__.c.salary,
    Job.__table__.c.equity,
    Job.__table__.c.company_handle,
]


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    No duplicate check: two jobs may share every field but the id.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If company_handle does not name a company
    """
    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"No company: {job_data.company_handle}")
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
    return db_job


def find_all(db: Session) -> List[Job]:
    """Return every job ordered by company handle."""
    return db.query(Job).order_by(Job.company_handle, Job.id).all()


def filter(db: Session, query: Mapping[str, Any]) -> List[Job]:
    """
    Return jobs matching every supplied filter, ordered by company handle.

    Filters:
        title: case-insensitive substring of the title
        minSalary: inclusive lower bound on salary
        hasEquity: only the exact string "true" restricts to equity > 0;
            any other value is accepted and ignored

    Raises:
        BadRequestError: On an unknown filter key or a non-integer minSalary
    """
    for key in query:
        if key not in VALID_FILTERS:
            raise BadRequestError("Invalid filter")

    jobs = db.query(Job)

    if "title" in query:
        jobs = jobs.filter(Job.title.ilike(f"%{query['title']}%"))
    if "minSalary" in query:
        try:
            min_salary = int(query["minSalary"])
        except (TypeError, ValueError):
            raise BadRequestError("minSalary must be an integer")
        jobs = jobs.filter(Job.salary >= min_salary)
    if query.get("hasEquity") == "true":
        jobs = jobs.filter(Job.equity > 0)

    return jobs.order_by(Job.company_handle, Job.id).all()


def get(db: Session, title: str) -> Dict[str, Any]:
    """
    Retrieve a job by its title, with the owning company in place of its handle.

    Returns:
        {id, title, salary, equity, company_handle} where company_handle is
        the full company row

    Raises:
        NotFoundError: If no job has this title
    """
    job = db.query(Job).filter(Job.title == title).order_by(Job.id).first()
    if not job:
        raise NotFoundError(f"No job: {title}")

    company = db.query(Company).filter(Company.handle == job.company_handle).first()

    return {
        "id": job.id,
        "title": job.title,
        "salary": job.salary,
        "equity": job.equity,
        "company_handle": company,
    }


def update(db: Session, job_id: int, data: Dict[str, Any]):
    """
    Partially update a job's title, salary and/or equity.

    Returns:
        The updated row (id, title, salary, equity, company_handle)

    Raises:
        BadRequestError: If ``data`` is empty or breaks a column constraint
        NotFoundError: If no job has this id
    """
    set_cols, values = sql_for_partial_update(data, {})
    id_var_idx = len(values) + 1

    query_sql = f"""UPDATE jobs
                    SET {set_cols}
                    WHERE id = ${id_var_idx}
                    RETURNING id, title, salary, equity, company_handle"""
    try:
        job = execute_positional(db, query_sql, [*values, job_id], _JOB_COLUMNS).first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Invalid job data for {job_id}")

    if not job:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    job = execute_positional(
        db,
        """DELETE
           FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id],
    ).first()
    db.commit()

    if not job:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Deleted job {job_id}")
