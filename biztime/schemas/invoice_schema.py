from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from biztime.schemas.company_schema import CompanyOut


# ============================================================
# Request Schemas
# ============================================================
class InvoiceCreate(BaseModel):
    comp_code: str = Field(min_length=1)
    amt: float = Field(gt=0)


class InvoiceUpdate(BaseModel):
    amt: float = Field(gt=0)
    paid: bool


# ============================================================
# OUT Schemas
# ============================================================
class InvoiceSummary(BaseModel):
    id: int
    comp_code: str

    model_config = ConfigDict(from_attributes=True)


class InvoiceOut(InvoiceSummary):
    amt: float
    paid: bool
    add_date: datetime
    paid_date: Optional[datetime] = None


class InvoiceDetail(BaseModel):
    """Invoice with its company nested instead of comp_code."""

    id: int
    amt: float
    paid: bool
    add_date: datetime
    paid_date: Optional[datetime] = None
    company: CompanyOut

    model_config = ConfigDict(from_attributes=True)


class InvoiceResponse(BaseModel):
    invoice: InvoiceOut


class InvoiceDetailResponse(BaseModel):
    invoice: InvoiceDetail


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceSummary]
