from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import InvoiceDetail, InvoiceRead, InvoiceWrite, LineItemRead
from ..services import invoices as invoices_service

router = APIRouter(prefix="/api")


def _read(invoice) -> InvoiceRead:
    read = InvoiceRead.model_validate(invoice)
    read.status = invoices_service.effective_status(invoice)
    return read


def _detail(invoice, items) -> InvoiceDetail:
    detail = InvoiceDetail.model_validate(invoice)
    detail.status = invoices_service.effective_status(invoice)
    detail.items = [LineItemRead.model_validate(item) for item in items]
    return detail


@router.post("/createInvoice/{company_id}", response_model=InvoiceDetail, status_code=201)
def create_invoice(
    company_id: int, payload: InvoiceWrite, db: Session = Depends(get_db)
) -> InvoiceDetail:
    invoice = invoices_service.create_invoice(db, company_id, payload)
    return _detail(*invoices_service.get_invoice(db, company_id, invoice.id))


@router.get("/invoices/{company_id}", response_model=list[InvoiceRead])
def list_invoices(company_id: int, db: Session = Depends(get_db)) -> list[InvoiceRead]:
    return [_read(invoice) for invoice in invoices_service.list_invoices(db, company_id)]


@router.get("/invoices/{company_id}/customer/{customer_id}", response_model=list[InvoiceRead])
def list_customer_invoices(
    company_id: int, customer_id: int, db: Session = Depends(get_db)
) -> list[InvoiceRead]:
    invoices = invoices_service.list_invoices(db, company_id, customer_id=customer_id)
    return [_read(invoice) for invoice in invoices]


@router.get("/invoices/{company_id}/{invoice_id}", response_model=InvoiceDetail)
def get_invoice(
    company_id: int, invoice_id: int, db: Session = Depends(get_db)
) -> InvoiceDetail:
    return _detail(*invoices_service.get_invoice(db, company_id, invoice_id))


@router.put("/invoices/{company_id}/{invoice_id}", response_model=InvoiceDetail)
def update_invoice(
    company_id: int,
    invoice_id: int,
    payload: InvoiceWrite,
    db: Session = Depends(get_db),
) -> InvoiceDetail:
    invoices_service.update_invoice(db, company_id, invoice_id, payload)
    return _detail(*invoices_service.get_invoice(db, company_id, invoice_id))


@router.delete("/invoices/{company_id}/{invoice_id}")
def delete_invoice(company_id: int, invoice_id: int, db: Session = Depends(get_db)) -> dict:
    invoices_service.delete_invoice(db, company_id, invoice_id)
    return {"message": "Invoice deleted successfully"}


@router.post("/invoices/{company_id}/{invoice_id}/send", response_model=InvoiceRead)
def send_invoice(
    company_id: int, invoice_id: int, db: Session = Depends(get_db)
) -> InvoiceRead:
    return _read(invoices_service.send_invoice(db, company_id, invoice_id))


@router.post("/invoices/{company_id}/{invoice_id}/cancel", response_model=InvoiceRead)
def cancel_invoice(
    company_id: int, invoice_id: int, db: Session = Depends(get_db)
) -> InvoiceRead:
    return _read(invoices_service.cancel_invoice(db, company_id, invoice_id))
