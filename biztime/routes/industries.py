from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from biztime.core.db import get_db
from biztime.schemas.industry_schema import (
    AssociationCreate,
    AssociationResponse,
    IndustryCompanyCodes,
    IndustryCreate,
    IndustryDetailResponse,
    IndustryResponse,
)
from biztime.services import industry_service

router = APIRouter()


@router.get("", response_model=List[IndustryCompanyCodes])
def list_industries_route(db: Session = Depends(get_db)):
    return industry_service.list_industries(db)


@router.get("/{code}", response_model=IndustryDetailResponse)
def get_industry_route(code: str, db: Session = Depends(get_db)):
    return {"industry": industry_service.get_industry_detail(db, code)}


@router.post("", response_model=IndustryResponse, status_code=status.HTTP_201_CREATED)
def create_industry_route(payload: IndustryCreate, db: Session = Depends(get_db)):
    return {"industry": industry_service.create_industry(db, payload)}


@router.post("/{code}/companies", response_model=AssociationResponse)
def associate_company_route(code: str, payload: AssociationCreate, db: Session = Depends(get_db)):
    return {"industry": industry_service.associate_company(db, code, payload.companyCode)}
