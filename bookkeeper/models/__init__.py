from .base import Base
from .bill import Bill, BillItem, BillStatusEnum
from .company import Company
from .customer import Customer
from .document_sequence import DocumentSequence
from .estimate import Estimate, EstimateItem, EstimateStatusEnum
from .expense import Expense, ExpenseItem
from .invoice import Invoice, InvoiceStatusEnum
from .invoice_line import InvoiceItem
from .lookups import ExpenseCategory, Payee, PaymentAccount, PaymentMethod
from .payment import Payment, PaymentAllocation
from .product import Product
from .vendor import Vendor

__all__ = [
    "Base",
    "Bill",
    "BillItem",
    "BillStatusEnum",
    "Company",
    "Customer",
    "DocumentSequence",
    "Estimate",
    "EstimateItem",
    "EstimateStatusEnum",
    "Expense",
    "ExpenseItem",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatusEnum",
    "ExpenseCategory",
    "Payee",
    "PaymentAccount",
    "PaymentMethod",
    "Payment",
    "PaymentAllocation",
    "Product",
    "Vendor",
]
