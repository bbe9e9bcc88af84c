from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import AgingSummary, OpenInvoiceRead
from ..services import reports as reports_service

router = APIRouter(prefix="/api/reports")


@router.get("/ar-aging-summary/{company_id}", response_model=AgingSummary)
def ar_aging_summary(company_id: int, db: Session = Depends(get_db)) -> AgingSummary:
    return reports_service.ar_aging_summary(db, company_id)


@router.get(
    "/ar-aging-summary/{company_id}/customer/{customer_id}",
    response_model=list[OpenInvoiceRead],
)
def ar_aging_customer_invoices(
    company_id: int, customer_id: int, db: Session = Depends(get_db)
) -> list[OpenInvoiceRead]:
    return reports_service.customer_open_invoices(db, company_id, customer_id)
