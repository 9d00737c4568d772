from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from jobly.schemas.job import JobResponse, reject_null


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company (camelCase on the wire)"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0, strict=True)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        extra = "forbid"


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update; the handle cannot change"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0, strict=True)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description", mode="before")
    @classmethod
    def required_columns_not_null(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, serialization_alias="numEmployees")
    logo_url: Optional[str] = Field(None, serialization_alias="logoUrl")

    class Config:
        from_attributes = True


class CompanyDetailResponse(CompanyResponse):
    """Company with every job it posted"""
    jobs: List[JobResponse] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]


class DeletedResponse(BaseModel):
    """Body of every DELETE endpoint; the identifier is always a string"""
    deleted: str
