from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import (
    CompanyCreate,
    CompanyRead,
    CustomerCreate,
    CustomerRead,
    ProductCreate,
    ProductRead,
    VendorCreate,
    VendorRead,
)
from ..services import parties as parties_service

router = APIRouter(prefix="/api")


@router.post("/companies", response_model=CompanyRead, status_code=201)
def create_company(payload: CompanyCreate, db: Session = Depends(get_db)) -> CompanyRead:
    return parties_service.create_company(db, payload)


@router.get("/companies", response_model=list[CompanyRead])
def list_companies(db: Session = Depends(get_db)) -> list[CompanyRead]:
    return parties_service.list_companies(db)


@router.post("/customers/{company_id}", response_model=CustomerRead, status_code=201)
def create_customer(
    company_id: int, payload: CustomerCreate, db: Session = Depends(get_db)
) -> CustomerRead:
    return parties_service.create_customer(db, company_id, payload)


@router.get("/customers/{company_id}", response_model=list[CustomerRead])
def list_customers(company_id: int, db: Session = Depends(get_db)) -> list[CustomerRead]:
    return parties_service.list_customers(db, company_id)


@router.post("/vendors/{company_id}", response_model=VendorRead, status_code=201)
def create_vendor(
    company_id: int, payload: VendorCreate, db: Session = Depends(get_db)
) -> VendorRead:
    return parties_service.create_vendor(db, company_id, payload)


@router.get("/vendors/{company_id}", response_model=list[VendorRead])
def list_vendors(company_id: int, db: Session = Depends(get_db)) -> list[VendorRead]:
    return parties_service.list_vendors(db, company_id)


@router.post("/products/{company_id}", response_model=ProductRead, status_code=201)
def create_product(
    company_id: int, payload: ProductCreate, db: Session = Depends(get_db)
) -> ProductRead:
    return parties_service.create_product(db, company_id, payload)


@router.get("/products/{company_id}", response_model=list[ProductRead])
def list_products(company_id: int, db: Session = Depends(get_db)) -> list[ProductRead]:
    return parties_service.list_products(db, company_id)
