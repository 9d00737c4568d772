from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


def _equity_from_json(v):
    """Keep JSON floats like 0.4 exact by going through their text form."""
    if isinstance(v, bool):
        raise ValueError("equity must be a number or decimal string")
    if isinstance(v, float):
        return str(v)
    return v


def reject_null(v):
    """For optional update fields whose column is NOT NULL: omit, don't send null."""
    if v is None:
        raise ValueError("may not be null")
    return v


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, strict=True)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)

    @field_validator("equity", mode="before")
    @classmethod
    def normalize_equity(cls, v):
        return _equity_from_json(v)

    class Config:
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    company_handle is fixed at creation and is rejected here.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, strict=True)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title", mode="before")
    @classmethod
    def title_not_null(cls, v):
        return reject_null(v)

    @field_validator("equity", mode="before")
    @classmethod
    def normalize_equity(cls, v):
        return _equity_from_json(v)

    class Config:
        extra = "forbid"


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models and rows


class JobCompanyResponse(BaseModel):
    """Owning company as nested inside a single job (column names, not camelCase)"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None

    class Config:
        from_attributes = True


class JobDetailResponse(BaseModel):
    """Single job with the full owning company under company_handle"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: Optional[JobCompanyResponse] = None

    class Config:
        from_attributes = True


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]
