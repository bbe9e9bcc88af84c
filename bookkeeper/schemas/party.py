from decimal import Decimal

from pydantic import BaseModel

from .common import Money


class CompanyCreate(BaseModel):
    name: str
    address: str | None = None


class CompanyRead(BaseModel):
    id: int
    name: str
    address: str | None

    model_config = {"from_attributes": True}


class CustomerCreate(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    billing_address: str | None = None
    shipping_address: str | None = None


class CustomerRead(CustomerCreate):
    id: int
    company_id: int

    model_config = {"from_attributes": True}


class VendorCreate(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class VendorRead(VendorCreate):
    id: int
    company_id: int

    model_config = {"from_attributes": True}


class ProductCreate(BaseModel):
    name: str
    sku: str | None = None
    description: str | None = None
    unit_price: Decimal = Decimal("0")
    cost_price: Decimal | None = None
    tax_rate: Decimal = Decimal("0")


class ProductRead(BaseModel):
    id: int
    company_id: int
    name: str
    sku: str | None
    description: str | None
    unit_price: Money
    cost_price: Money | None
    tax_rate: Money

    model_config = {"from_attributes": True}
