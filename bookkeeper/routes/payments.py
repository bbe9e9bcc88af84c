from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import PaymentCreate, PaymentRead
from ..services import payments as payments_service

router = APIRouter(prefix="/api")


@router.post(
    "/recordPayment/{company_id}/{customer_id}",
    response_model=PaymentRead,
    status_code=201,
)
def record_payment(
    company_id: int,
    customer_id: int,
    payload: PaymentCreate,
    db: Session = Depends(get_db),
) -> PaymentRead:
    return payments_service.allocate_payment(db, company_id, customer_id, payload)


@router.get("/payments/{company_id}/customer/{customer_id}", response_model=list[PaymentRead])
def list_customer_payments(
    company_id: int, customer_id: int, db: Session = Depends(get_db)
) -> list[PaymentRead]:
    return payments_service.list_payments(db, company_id, customer_id)
