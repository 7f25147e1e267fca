from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    CheckConstraint,
    false,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from biztime.core.db import Base


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (CheckConstraint("amt > 0", name="invoices_amt_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)

    comp_code = Column(
        String,
        ForeignKey("companies.code", ondelete="CASCADE"),
        nullable=False,
    )

    amt = Column(Float, nullable=False)

    # --- Payment state ---
    # paid_date is set when the invoice gets paid and cleared when un-paid
    paid = Column(Boolean, nullable=False, default=False, server_default=false())
    add_date = Column(DateTime, nullable=False, server_default=func.now())
    paid_date = Column(DateTime, nullable=True)

    # Relationship back to the company
    company = relationship("Company", back_populates="invoices")
