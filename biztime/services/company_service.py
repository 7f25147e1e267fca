import logging

from sqlalchemy.orm import Session

from biztime.core.errors import NotFoundError
from biztime.models.company_model import Company
from biztime.models.industry_model import Industry, companies_industries
from biztime.models.invoice_model import Invoice
from biztime.schemas.company_schema import CompanyCreate, CompanyUpdate

logger = logging.getLogger(__name__)


def list_companies(db: Session):
    return db.query(Company.code, Company.name).order_by(Company.code).all()


def get_company(db: Session, code: str) -> Company:
    company = db.get(Company, code)
    if company is None:
        raise NotFoundError(f"Can't find company with code of {code}")
    return company


def get_company_detail(db: Session, code: str) -> dict:
    """Company row plus the ids of its invoices and the names of its industries."""
    company = get_company(db, code)

    invoice_ids = [
        row.id
        for row in db.query(Invoice.id).filter(Invoice.comp_code == code).order_by(Invoice.id)
    ]

    industry_rows = (
        db.query(Industry.industry_name)
        .select_from(Company)
        .outerjoin(companies_industries, companies_industries.c.comp_code == Company.code)
        .outerjoin(Industry, Industry.code == companies_industries.c.industries_code)
        .filter(Company.code == code)
        .order_by(Industry.industry_name)
        .all()
    )
    # a company without industries yields a single all-NULL row
    industry_names = [row.industry_name for row in industry_rows if row.industry_name is not None]

    return {
        "code": company.code,
        "name": company.name,
        "description": company.description,
        "invoices": invoice_ids,
        "industry": industry_names,
    }


def create_company(db: Session, payload: CompanyCreate) -> Company:
    company = Company(code=payload.code, name=payload.name, description=payload.description)
    db.add(company)
    db.commit()
    db.refresh(company)
    logger.info("Created company %s", company.code)
    return company


def update_company(db: Session, code: str, payload: CompanyUpdate) -> Company:
    company = get_company(db, code)
    company.name = payload.name
    company.description = payload.description
    db.commit()
    db.refresh(company)
    return company


def delete_company(db: Session, code: str) -> None:
    """Deletes the company; its invoices and industry links go with it."""
    company = get_company(db, code)
    db.delete(company)
    db.commit()
    logger.info("Deleted company %s", code)
