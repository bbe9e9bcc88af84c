from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ExpenseDetail, ExpenseWrite
from ..services import expenses as expenses_service

router = APIRouter(prefix="/api")


@router.post("/createExpenses/{company_id}", response_model=ExpenseDetail, status_code=201)
def create_expense(
    company_id: int, payload: ExpenseWrite, db: Session = Depends(get_db)
) -> ExpenseDetail:
    expense = expenses_service.create_expense(db, company_id, payload)
    return expenses_service.expense_detail(db, expense)


@router.get("/expenses/{company_id}", response_model=list[ExpenseDetail])
def list_expenses(company_id: int, db: Session = Depends(get_db)) -> list[ExpenseDetail]:
    return expenses_service.list_expenses(db, company_id)
