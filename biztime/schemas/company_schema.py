from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CompanyCreate(BaseModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CompanyUpdate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CompanySummary(BaseModel):
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class CompanyOut(CompanySummary):
    description: Optional[str] = None


class CompanyDetail(CompanyOut):
    invoices: List[int] = []
    industry: List[str] = []


class CompanyResponse(BaseModel):
    company: CompanyOut


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail


class CompanyListResponse(BaseModel):
    companies: List[CompanySummary]
