from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import relationship
from biztime.core.db import Base


# Association table: many-to-many (companies ↔ industries)
companies_industries = Table(
    "companies_industries",
    Base.metadata,
    Column("comp_code", String, ForeignKey("companies.code", ondelete="CASCADE"), primary_key=True),
    Column("industries_code", String, ForeignKey("industries.code", ondelete="CASCADE"), primary_key=True),
)


class Industry(Base):
    __tablename__ = "industries"

    code = Column(String, primary_key=True)
    industry_name = Column(String, nullable=False, unique=True)

    companies = relationship(
        "Company",
        secondary=companies_industries,
        back_populates="industries",
        passive_deletes=True,
        order_by="Company.code",
    )
