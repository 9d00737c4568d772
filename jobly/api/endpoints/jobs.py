from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import job as job_crud
from jobly.schemas.company import DeletedResponse
from jobly.schemas.job import (
    JobCreateRequest,
    JobDetailEnvelope,
    JobEnvelope,
    JobListEnvelope,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

# jobs.id is a 32-bit SERIAL; larger ids are rejected before reaching the driver
MAX_JOB_ID = 2**31 - 1


@router.post("", status_code=201, response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job posting. Admin only.

    Body: { title, salary, equity, company_handle }
    Equity may be sent as a number or a decimal string; it is always
    returned as a string.
    """
    job = job_crud.create(db, request)
    return {"job": job}


@router.get("", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs, optionally filtered.

    Query filters (all optional):
    - title: case-insensitive substring match
    - minSalary: inclusive lower bound
    - hasEquity: "true" keeps only jobs with equity above zero
    """
    query = dict(request.query_params)
    if query:
        jobs = job_crud.filter(db, query)
    else:
        jobs = job_crud.find_all(db)
    return {"jobs": jobs}


@router.get("/{title}", response_model=JobDetailEnvelope)
def get_job(title: str, db: Session = Depends(get_db)):
    """
    Get a job by its title.

    The owning company is returned in full under company_handle.
    """
    return {"job": job_crud.get(db, title)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def update_job(
    request: JobUpdateRequest,
    job_id: int = Path(..., le=MAX_JOB_ID),
    db: Session = Depends(get_db)
):
    """
    Partially update a job. Admin only.

    Body may contain any of { title, salary, equity }.
    """
    data = request.model_dump(exclude_unset=True)
    job = job_crud.update(db, job_id, data)
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse, dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int = Path(..., le=MAX_JOB_ID), db: Session = Depends(get_db)):
    """Delete a job by ID. Admin only."""
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
