import logging
from datetime import datetime
from typing import Optional, Union

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql import ColumnElement, func

from biztime.core.errors import NotFoundError
from biztime.models.invoice_model import Invoice
from biztime.schemas.invoice_schema import InvoiceCreate, InvoiceUpdate

logger = logging.getLogger(__name__)


def resolve_paid_date(
    current_paid_date: Optional[datetime],
    paid: bool,
    now: Union[datetime, ColumnElement],
) -> Optional[Union[datetime, ColumnElement]]:
    """
    paid_date to store after an update.

        unpaid + paid=True   -> now (payment just happened)
        any    + paid=False  -> None
        paid   + paid=True   -> unchanged
    """
    if paid and current_paid_date is None:
        return now
    if not paid:
        return None
    return current_paid_date


class InvoiceService:
    """
    Thin data-access layer for invoices.

    Every lookup by id raises NotFoundError when the row is missing.
    """

    # ------------------------------------------------------------
    # Fetch all invoices
    # ------------------------------------------------------------
    def get_all_invoices(self, db: Session):
        return db.query(Invoice.id, Invoice.comp_code).order_by(Invoice.id).all()

    # ------------------------------------------------------------
    # Fetch single invoice by ID (company eagerly joined)
    # ------------------------------------------------------------
    def get_invoice(self, db: Session, invoice_id: int) -> Invoice:
        invoice = (
            db.query(Invoice)
            .options(joinedload(Invoice.company))
            .filter(Invoice.id == invoice_id)
            .first()
        )
        if not invoice:
            raise NotFoundError(f"Can't find an invoice with an id of {invoice_id}")
        return invoice

    # ------------------------------------------------------------
    # Create
    # ------------------------------------------------------------
    def create_invoice(self, db: Session, payload: InvoiceCreate) -> Invoice:
        invoice = Invoice(comp_code=payload.comp_code, amt=payload.amt, paid=False, paid_date=None)
        db.add(invoice)
        db.commit()
        db.refresh(invoice)
        logger.info("Created invoice %s for %s", invoice.id, invoice.comp_code)
        return invoice

    # ------------------------------------------------------------
    # Update amount and payment state
    # ------------------------------------------------------------
    def update_invoice(
        self,
        db: Session,
        invoice_id: int,
        payload: InvoiceUpdate,
        now: Optional[datetime] = None,
    ) -> Invoice:
        """
        Read-then-write: two concurrent updates of the same invoice may
        both see the old paid_date.

        Without an explicit `now` the payment is stamped by the database
        clock, the same one that fills add_date.
        """
        invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError(f"Can't find an invoice with an id of {invoice_id}")

        invoice.paid_date = resolve_paid_date(
            invoice.paid_date, payload.paid, now if now is not None else func.now(),
        )
        invoice.amt = payload.amt
        invoice.paid = payload.paid

        db.commit()
        db.refresh(invoice)
        return invoice

    # ------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------
    def delete_invoice(self, db: Session, invoice_id: int) -> None:
        invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError(f"Can't find an invoice with an id of {invoice_id}")

        db.delete(invoice)
        db.commit()
        logger.info("Deleted invoice %s", invoice_id)


invoice_service = InvoiceService()
