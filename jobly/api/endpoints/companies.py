from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyUpdateRequest,
    DeletedResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=201, response_model=CompanyEnvelope, dependencies=[Depends(ensure_admin)])
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """
    Create a company. Admin only.

    Body: { handle, name, description, numEmployees, logoUrl }
    """
    company = company_crud.create(db, request)
    return {"company": company}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies, optionally filtered.

    Query filters (all optional):
    - name: case-insensitive substring match
    - minEmployees / maxEmployees: inclusive bounds

    Any other query parameter is rejected with 400.
    """
    query = dict(request.query_params)
    if query:
        companies = company_crud.filter(db, query)
    else:
        companies = company_crud.find_all(db)
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and all of its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_admin)])
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company. Admin only.

    Body may contain any of { name, description, numEmployees, logoUrl }.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    company = company_crud.update(db, handle, data)
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse, dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """Delete a company. Admin only."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
