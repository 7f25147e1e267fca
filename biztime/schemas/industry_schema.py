from pydantic import BaseModel, ConfigDict, Field
from typing import List


class IndustryCreate(BaseModel):
    code: str = Field(min_length=1)
    industry_name: str = Field(min_length=1)


class IndustryOut(BaseModel):
    code: str
    industry_name: str

    model_config = ConfigDict(from_attributes=True)


class IndustryDetail(IndustryOut):
    companies: List[str] = []


class IndustryCompanyCodes(BaseModel):
    # camelCase key is part of the public contract
    code: str
    companyCodes: List[str] = []


class IndustryResponse(BaseModel):
    industry: IndustryOut


class IndustryDetailResponse(BaseModel):
    industry: IndustryDetail


class AssociationCreate(BaseModel):
    companyCode: str = Field(min_length=1)


class AssociationOut(BaseModel):
    comp_code: str
    industries_code: str


class AssociationResponse(BaseModel):
    industry: AssociationOut
