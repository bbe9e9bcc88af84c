from .bill import BillDetail, BillRead, BillWrite
from .common import LineItemIn, LineItemRead, Money
from .estimate import ConversionResult, EstimateDetail, EstimateRead, EstimateWrite
from .expense import ExpenseDetail, ExpenseRead, ExpenseWrite
from .invoice import InvoiceDetail, InvoiceRead, InvoiceWrite
from .lookup import NamedEntityCreate, NamedEntityRead
from .party import (
    CompanyCreate,
    CompanyRead,
    CustomerCreate,
    CustomerRead,
    ProductCreate,
    ProductRead,
    VendorCreate,
    VendorRead,
)
from .payment import AllocationRead, PaymentCreate, PaymentRead
from .report import AgingRow, AgingSummary, OpenInvoiceRead

__all__ = [
    "BillDetail",
    "BillRead",
    "BillWrite",
    "LineItemIn",
    "LineItemRead",
    "Money",
    "ConversionResult",
    "EstimateDetail",
    "EstimateRead",
    "EstimateWrite",
    "ExpenseDetail",
    "ExpenseRead",
    "ExpenseWrite",
    "InvoiceDetail",
    "InvoiceRead",
    "InvoiceWrite",
    "NamedEntityCreate",
    "NamedEntityRead",
    "CompanyCreate",
    "CompanyRead",
    "CustomerCreate",
    "CustomerRead",
    "ProductCreate",
    "ProductRead",
    "VendorCreate",
    "VendorRead",
    "AllocationRead",
    "PaymentCreate",
    "PaymentRead",
    "AgingRow",
    "AgingSummary",
    "OpenInvoiceRead",
]
