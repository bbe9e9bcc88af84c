from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import (
    ConversionResult,
    EstimateDetail,
    EstimateRead,
    EstimateWrite,
    LineItemRead,
)
from ..services import estimates as estimates_service

router = APIRouter(prefix="/api/estimates")


def _detail(estimate, items) -> EstimateDetail:
    detail = EstimateDetail.model_validate(estimate)
    detail.items = [LineItemRead.model_validate(item) for item in items]
    return detail


@router.post("/{company_id}", response_model=EstimateDetail, status_code=201)
def create_estimate(
    company_id: int, payload: EstimateWrite, db: Session = Depends(get_db)
) -> EstimateDetail:
    estimate = estimates_service.create_estimate(db, company_id, payload)
    return _detail(*estimates_service.get_estimate(db, company_id, estimate.id))


@router.get("/{company_id}", response_model=list[EstimateRead])
def list_estimates(company_id: int, db: Session = Depends(get_db)) -> list[EstimateRead]:
    return estimates_service.list_estimates(db, company_id)


@router.get("/{company_id}/customer/{customer_id}", response_model=list[EstimateRead])
def list_customer_estimates(
    company_id: int, customer_id: int, db: Session = Depends(get_db)
) -> list[EstimateRead]:
    return estimates_service.list_estimates(db, company_id, customer_id=customer_id)


@router.get("/{company_id}/{estimate_id}", response_model=EstimateDetail)
def get_estimate(
    company_id: int, estimate_id: int, db: Session = Depends(get_db)
) -> EstimateDetail:
    return _detail(*estimates_service.get_estimate(db, company_id, estimate_id))


@router.get("/{company_id}/{estimate_id}/items", response_model=list[LineItemRead])
def get_estimate_items(
    company_id: int, estimate_id: int, db: Session = Depends(get_db)
) -> list[LineItemRead]:
    _, items = estimates_service.get_estimate(db, company_id, estimate_id)
    return items


@router.put("/{company_id}/{estimate_id}", response_model=EstimateDetail)
def update_estimate(
    company_id: int,
    estimate_id: int,
    payload: EstimateWrite,
    db: Session = Depends(get_db),
) -> EstimateDetail:
    estimates_service.update_estimate(db, company_id, estimate_id, payload)
    return _detail(*estimates_service.get_estimate(db, company_id, estimate_id))


@router.delete("/{company_id}/{estimate_id}")
def delete_estimate(company_id: int, estimate_id: int, db: Session = Depends(get_db)) -> dict:
    estimates_service.delete_estimate(db, company_id, estimate_id)
    return {"message": "Estimate deleted successfully"}


@router.post("/{company_id}/{estimate_id}/convert", response_model=ConversionResult)
def convert_estimate(
    company_id: int, estimate_id: int, db: Session = Depends(get_db)
) -> ConversionResult:
    invoice = estimates_service.convert_estimate(db, company_id, estimate_id)
    return ConversionResult(
        message="Estimate converted to invoice successfully",
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
    )
