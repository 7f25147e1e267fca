from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from biztime.core.db import Base


class Company(Base):
    __tablename__ = "companies"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # Relationship: one-to-many (companies → invoices)
    invoices = relationship(
        "Invoice",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Invoice.id",
    )

    # Relationship: many-to-many (companies ↔ industries)
    industries = relationship(
        "Industry",
        secondary="companies_industries",
        back_populates="companies",
        passive_deletes=True,
        order_by="Industry.code",
    )
