"""
Memo service.
"""
from typing import List

from sqlalchemy.orm import Session

from tripmaster.core.exceptions import NotFoundError
from tripmaster.core.utils import generate_id, utcnow
from tripmaster.db.session import commit_or_conflict, retry_on_disconnect
from tripmaster.models.memo import Memo
from tripmaster.schemas.memo import MemoCreate, MemoUpdate

DEFAULT_TITLE = "new memo"


@retry_on_disconnect
def list_memos(db: Session, owner_id: int) -> List[Memo]:
    """Memos of the owner, most recently edited first."""
    return db.query(Memo).filter(
        Memo.user_id == owner_id
    ).order_by(Memo.updated_at.desc()).all()


def _get_owned_memo(db: Session, owner_id: int, memo_id: str) -> Memo:
    memo = db.query(Memo).filter(
        Memo.id == memo_id,
        Memo.user_id == owner_id
    ).first()
    if not memo:
        raise NotFoundError("Memo not found")
    return memo


def create_memo(db: Session, owner_id: int, data: MemoCreate) -> Memo:
    memo = Memo(
        id=data.id or generate_id(),
        title=data.title or DEFAULT_TITLE,
        content=data.content or "",
        user_id=owner_id,
    )
    db.add(memo)
    commit_or_conflict(db, "Memo id already exists")
    db.refresh(memo)
    return memo


def update_memo(db: Session, owner_id: int, memo_id: str, data: MemoUpdate) -> Memo:
    memo = _get_owned_memo(db, owner_id, memo_id)

    updates = data.model_dump(exclude_unset=True)
    if "title" in updates:
        memo.title = updates["title"] or DEFAULT_TITLE
    if "content" in updates:
        memo.content = updates["content"] or ""

    memo.updated_at = utcnow()
    db.commit()
    db.refresh(memo)
    return memo


def delete_memo(db: Session, owner_id: int, memo_id: str) -> None:
    memo = _get_owned_memo(db, owner_id, memo_id)
    db.delete(memo)
    db.commit()
