"""
Memo routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripmaster.db.session import get_db
from tripmaster.schemas.common import MessageResponse
from tripmaster.schemas.memo import MemoCreate, MemoResponse, MemoUpdate
from tripmaster.services import memo_service
from tripmaster.api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/memos", tags=["memos"])


@router.get("", response_model=List[MemoResponse])
def list_memos(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return memo_service.list_memos(db, current_user.user_id)


@router.post("", response_model=MemoResponse, status_code=status.HTTP_201_CREATED)
def create_memo(
    memo_data: MemoCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return memo_service.create_memo(db, current_user.user_id, memo_data)


@router.put("/{memo_id}", response_model=MemoResponse)
def update_memo(
    memo_id: str,
    memo_data: MemoUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return memo_service.update_memo(db, current_user.user_id, memo_id, memo_data)


@router.delete("/{memo_id}", response_model=MessageResponse)
def delete_memo(
    memo_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    memo_service.delete_memo(db, current_user.user_id, memo_id)
    return {"message": "Memo deleted successfully"}
