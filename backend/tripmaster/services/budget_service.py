"""
Budget service for planned vs. actual spending line items.
"""
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from tripmaster.core.exceptions import NotFoundError
from tripmaster.core.utils import generate_id, utcnow
from tripmaster.db.session import commit_or_conflict, retry_on_disconnect
from tripmaster.models.budget import Budget
from tripmaster.schemas.budget import DEFAULT_CATEGORY, BudgetCreate, BudgetUpdate


@retry_on_disconnect
def list_budgets(db: Session, owner_id: int) -> List[Budget]:
    return db.query(Budget).filter(
        Budget.user_id == owner_id
    ).order_by(Budget.created_at.desc()).all()


def _get_owned_budget(db: Session, owner_id: int, budget_id: str) -> Budget:
    budget = db.query(Budget).filter(
        Budget.id == budget_id,
        Budget.user_id == owner_id
    ).first()
    if not budget:
        raise NotFoundError("Budget not found")
    return budget


def create_budget(db: Session, owner_id: int, data: BudgetCreate) -> Budget:
    budget = Budget(
        id=data.id or generate_id(),
        name=data.name,
        description=data.description,
        amount=data.amount,
        actual_amount=data.actual_amount,
        category=data.category or DEFAULT_CATEGORY,
        user_id=owner_id,
    )
    db.add(budget)
    commit_or_conflict(db, "Budget id already exists")
    db.refresh(budget)
    return budget


def update_budget(db: Session, owner_id: int, budget_id: str, data: BudgetUpdate) -> Budget:
    """Apply supplied fields only; explicit nulls on amounts reset them to 0."""
    budget = _get_owned_budget(db, owner_id, budget_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("amount", "actual_amount"):
            value = value if value is not None else Decimal(0)
        elif field == "category":
            value = value or DEFAULT_CATEGORY
        elif field == "name" and not value:
            continue
        setattr(budget, field, value)

    budget.updated_at = utcnow()
    db.commit()
    db.refresh(budget)
    return budget


def delete_budget(db: Session, owner_id: int, budget_id: str) -> None:
    budget = _get_owned_budget(db, owner_id, budget_id)
    db.delete(budget)
    db.commit()
