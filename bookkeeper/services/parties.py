import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import ConflictError, ValidationError
from ..models import Company, Customer, Product, Vendor
from ..schemas import CompanyCreate, CustomerCreate, ProductCreate, VendorCreate
from .calculations import HUNDRED, money, to_decimal
from .documents import ensure_company

logger = logging.getLogger(__name__)


def _required_name(name: str | None, label: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} name is required.", field="name")
    return cleaned


def create_company(db: Session, payload: CompanyCreate) -> Company:
    name = _required_name(payload.name, "Company")
    existing = db.execute(
        select(Company).where(func.lower(Company.name) == name.lower())
    ).scalar_one_or_none()
    if existing:
        raise ConflictError(f"Company '{name}' already exists.", field="name")
    with atomic(db, "create company", conflict_message=f"Company '{name}' already exists."):
        company = Company(name=name, address=payload.address)
        db.add(company)
    logger.info("Created company %s (id=%s)", company.name, company.id)
    return company


def list_companies(db: Session) -> list[Company]:
    return list(db.scalars(select(Company).order_by(Company.name)))


def create_customer(db: Session, company_id: int, payload: CustomerCreate) -> Customer:
    name = _required_name(payload.name, "Customer")
    ensure_company(db, company_id)
    with atomic(db, "create customer"):
        customer = Customer(
            company_id=company_id,
            name=name,
            email=payload.email,
            phone=payload.phone,
            billing_address=payload.billing_address,
            shipping_address=payload.shipping_address,
        )
        db.add(customer)
    return customer


def list_customers(db: Session, company_id: int) -> list[Customer]:
    return list(
        db.scalars(
            select(Customer)
            .where(Customer.company_id == company_id)
            .order_by(Customer.name)
        )
    )


def create_vendor(db: Session, company_id: int, payload: VendorCreate) -> Vendor:
    name = _required_name(payload.name, "Vendor")
    ensure_company(db, company_id)
    with atomic(db, "create vendor"):
        vendor = Vendor(
            company_id=company_id,
            name=name,
            email=payload.email,
            phone=payload.phone,
            address=payload.address,
        )
        db.add(vendor)
    return vendor


def list_vendors(db: Session, company_id: int) -> list[Vendor]:
    return list(
        db.scalars(
            select(Vendor).where(Vendor.company_id == company_id).order_by(Vendor.name)
        )
    )


def create_product(db: Session, company_id: int, payload: ProductCreate) -> Product:
    name = _required_name(payload.name, "Product")
    if payload.unit_price < 0:
        raise ValidationError("Unit price cannot be negative.", field="unit_price")
    if payload.cost_price is not None and payload.cost_price < 0:
        raise ValidationError("Cost price cannot be negative.", field="cost_price")
    if payload.tax_rate < 0 or payload.tax_rate > HUNDRED:
        raise ValidationError("Tax rate must be between 0 and 100.", field="tax_rate")
    ensure_company(db, company_id)
    with atomic(db, "create product"):
        product = Product(
            company_id=company_id,
            sku=(payload.sku or "").strip() or None,
            name=name,
            description=payload.description,
            unit_price=money(payload.unit_price),
            cost_price=money(payload.cost_price) if payload.cost_price is not None else None,
            tax_rate=to_decimal(payload.tax_rate),
        )
        db.add(product)
    return product


def list_products(db: Session, company_id: int) -> list[Product]:
    return list(
        db.scalars(
            select(Product).where(Product.company_id == company_id).order_by(Product.name)
        )
    )
