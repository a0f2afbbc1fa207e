# routers/expenses.py
"""
Expense API routes.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from models import Expense
from schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def _get_expense_or_404(db: Session, expense_id: int) -> Expense:
     expense = db.query(Expense).filter(Expense.id == expense_id).first()
     if not expense:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Expense not found"
          )
     return expense


@router.get("", response_model=List[ExpenseResponse], summary="List all expenses")
def list_expenses(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     return db.query(Expense).order_by(Expense.created_at.desc(), Expense.id.desc()).all()


@router.post(
     "",
     response_model=ExpenseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new expense"
)
def create_expense(
     expense_data: ExpenseCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     expense = Expense(**expense_data.model_dump(exclude_unset=True))
     db.add(expense)
     db.commit()
     db.refresh(expense)
     logger.info("Created expense %s", expense.id)
     return expense


@router.put("/{expense_id}", response_model=ExpenseResponse, summary="Update expense")
def update_expense(
     expense_id: int,
     expense_data: ExpenseUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     expense = _get_expense_or_404(db, expense_id)
     for field, value in expense_data.model_dump(exclude_unset=True).items():
          setattr(expense, field, value)
     db.commit()
     db.refresh(expense)
     logger.info("Updated expense %s", expense_id)
     return expense


@router.delete("/{expense_id}", summary="Delete expense")
def delete_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     expense = _get_expense_or_404(db, expense_id)
     db.delete(expense)
     db.commit()
     logger.info("Deleted expense %s", expense_id)
     return {"message": "Expense deleted successfully"}
