from fastapi import APIRouter

from .bills import router as bills_router
from .estimates import router as estimates_router
from .expenses import router as expenses_router
from .invoices import router as invoices_router
from .lookups import router as lookups_router
from .parties import router as parties_router
from .payments import router as payments_router
from .reports import router as reports_router

api_router = APIRouter()
api_router.include_router(parties_router, tags=["parties"])
api_router.include_router(lookups_router, tags=["lookups"])
api_router.include_router(estimates_router, tags=["estimates"])
api_router.include_router(invoices_router, tags=["invoices"])
api_router.include_router(payments_router, tags=["payments"])
api_router.include_router(bills_router, tags=["bills"])
api_router.include_router(expenses_router, tags=["expenses"])
api_router.include_router(reports_router, tags=["reports"])
