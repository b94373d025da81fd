"""
Budget routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripmaster.db.session import get_db
from tripmaster.schemas.budget import BudgetCreate, BudgetResponse, BudgetUpdate
from tripmaster.schemas.common import MessageResponse
from tripmaster.services import budget_service
from tripmaster.api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.get("", response_model=List[BudgetResponse])
def list_budgets(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return budget_service.list_budgets(db, current_user.user_id)


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
def create_budget(
    budget_data: BudgetCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return budget_service.create_budget(db, current_user.user_id, budget_data)


@router.put("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    budget_data: BudgetUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a budget item. Fields left out of the body keep their values."""
    return budget_service.update_budget(db, current_user.user_id, budget_id, budget_data)


@router.delete("/{budget_id}", response_model=MessageResponse)
def delete_budget(
    budget_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    budget_service.delete_budget(db, current_user.user_id, budget_id)
    return {"message": "Budget deleted successfully"}
