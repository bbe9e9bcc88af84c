from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import BillDetail, BillRead, BillWrite
from ..services import bills as bills_service

router = APIRouter(prefix="/api")


@router.post("/createBill/{company_id}", response_model=BillDetail, status_code=201)
def create_bill(
    company_id: int, payload: BillWrite, db: Session = Depends(get_db)
) -> BillDetail:
    bill = bills_service.create_bill(db, company_id, payload)
    return bills_service.bill_detail(db, bill)


@router.get("/bills/{company_id}", response_model=list[BillRead])
def list_bills(company_id: int, db: Session = Depends(get_db)) -> list[BillRead]:
    return bills_service.list_bills(db, company_id)


@router.get("/bills/{company_id}/{bill_id}", response_model=BillDetail)
def get_bill(company_id: int, bill_id: int, db: Session = Depends(get_db)) -> BillDetail:
    return bills_service.get_bill(db, company_id, bill_id)


@router.put("/bills/{company_id}/{bill_id}", response_model=BillDetail)
def update_bill(
    company_id: int, bill_id: int, payload: BillWrite, db: Session = Depends(get_db)
) -> BillDetail:
    bill = bills_service.update_bill(db, company_id, bill_id, payload)
    return bills_service.bill_detail(db, bill)
