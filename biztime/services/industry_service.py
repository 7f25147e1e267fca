import logging
from collections import defaultdict
from typing import Iterable, Tuple

from sqlalchemy.orm import Session

from biztime.core.errors import NotFoundError, ValidationFailure
from biztime.models.company_model import Company
from biztime.models.industry_model import Industry, companies_industries
from biztime.schemas.industry_schema import IndustryCreate

logger = logging.getLogger(__name__)


def group_company_codes(
    industry_codes: Iterable[str],
    associations: Iterable[Tuple[str, str]],
) -> list[dict]:
    """
    Groups (comp_code, industries_code) rows under each industry code.

    Industries keep the order they are given in; company codes keep the
    order of the association rows. Industries with no rows get [].
    """
    grouped = defaultdict(list)
    for comp_code, industries_code in associations:
        grouped[industries_code].append(comp_code)

    return [{"code": code, "companyCodes": grouped.get(code, [])} for code in industry_codes]


def list_industries(db: Session) -> list[dict]:
    industry_codes = [row.code for row in db.query(Industry.code).order_by(Industry.code)]
    associations = db.query(
        companies_industries.c.comp_code,
        companies_industries.c.industries_code,
    ).order_by(companies_industries.c.comp_code).all()
    return group_company_codes(industry_codes, associations)


def get_industry(db: Session, code: str) -> Industry:
    industry = db.get(Industry, code)
    if industry is None:
        raise NotFoundError(f"Can't find industry with code of {code}")
    return industry


def get_industry_detail(db: Session, code: str) -> dict:
    industry = get_industry(db, code)

    rows = (
        db.query(companies_industries.c.comp_code)
        .select_from(Industry)
        .outerjoin(companies_industries, companies_industries.c.industries_code == Industry.code)
        .filter(Industry.code == code)
        .order_by(companies_industries.c.comp_code)
        .all()
    )

    return {
        "code": industry.code,
        "industry_name": industry.industry_name,
        "companies": [row.comp_code for row in rows if row.comp_code is not None],
    }


def create_industry(db: Session, payload: IndustryCreate) -> Industry:
    industry = Industry(code=payload.code, industry_name=payload.industry_name)
    db.add(industry)
    db.commit()
    db.refresh(industry)
    logger.info("Created industry %s", industry.code)
    return industry


def associate_company(db: Session, industry_code: str, company_code: str) -> dict:
    """
    Links a company to an industry.

    Both sides are checked before the insert so a missing row answers 404
    instead of surfacing as a foreign key failure.
    """
    if db.get(Industry, industry_code) is None:
        raise NotFoundError(f"Can't find industry with code of {industry_code}")
    if db.get(Company, company_code) is None:
        raise ValidationFailure(f"Can't find company with code of {company_code}", 404)

    db.execute(
        companies_industries.insert().values(comp_code=company_code, industries_code=industry_code)
    )
    db.commit()
    logger.info("Associated company %s with industry %s", company_code, industry_code)

    return {"comp_code": company_code, "industries_code": industry_code}
