"""
Sticker (sticky-note todo) service and its optimistically updated cache.
"""
import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.sticker import Sticker
from jobtrack.services.optimistic import OptimisticUpdate, StateHolder

logger = logging.getLogger(__name__)


def _table(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, Sticker, user)


def _clean_text(text: str) -> str:
    text = (text or "").strip()
    if not text:
        raise ValueError("Sticker text is required")
    return text


def get_all_stickers(db: Session, user) -> List[Sticker]:
    """All stickers, oldest first."""
    return _table(db, user).select_all(order_by=[Sticker.created_at.asc(), Sticker.id.asc()])


def create_sticker(db: Session, user, text: str) -> Sticker:
    return _table(db, user).insert({"text": _clean_text(text), "is_completed": False})


def toggle_sticker(db: Session, user, sticker_id: int) -> Sticker:
    table = _table(db, user)
    current = table.get_or_raise(sticker_id)
    return table.update(sticker_id, {"is_completed": not current.is_completed})


def update_sticker(db: Session, user, sticker_id: int, text: str) -> Sticker:
    return _table(db, user).update(sticker_id, {"text": _clean_text(text)})


def delete_sticker(db: Session, user, sticker_id: int) -> None:
    _table(db, user).delete(sticker_id)


# ============================================
# Client-side cache
# ============================================

@dataclass(frozen=True)
class StickerItem:
    id: int
    text: str
    is_completed: bool

    @classmethod
    def from_row(cls, row) -> "StickerItem":
        return cls(id=row.id, text=row.text, is_completed=bool(row.is_completed))


class StickerBoard:
    """
    Cached sticker list that shows changes before they are saved.

    Each mutation applies locally, then calls the matching service function
    through `call`; a failed call puts the previous list back and re-raises.
    `call` receives a service function and its arguments after (db, user).
    """

    def __init__(self, call: Callable, items: Optional[List[StickerItem]] = None):
        self.call = call
        self.state = StateHolder(list(items or []))
        self.updates = OptimisticUpdate.on(self.state)

    @classmethod
    def for_session(cls, db: Session, user) -> "StickerBoard":
        board = cls(lambda fn, *args: fn(db, user, *args))
        board.reload()
        return board

    @property
    def items(self) -> List[StickerItem]:
        return self.state.get()

    def reload(self) -> List[StickerItem]:
        rows = self.call(get_all_stickers)
        self.state.set([StickerItem.from_row(row) for row in rows])
        return self.items

    def add(self, text: str) -> StickerItem:
        placeholder = StickerItem(id=-1, text=text.strip(), is_completed=False)

        def reconcile(items, row):
            saved = StickerItem.from_row(row)
            return [saved if item is placeholder else item for item in items]

        row = self.updates.run(
            apply=lambda items: items + [placeholder],
            persist=lambda: self.call(create_sticker, text),
            reconcile=reconcile,
        )
        return StickerItem.from_row(row)

    def toggle(self, sticker_id: int) -> None:
        self.updates.run(
            apply=lambda items: [
                replace(item, is_completed=not item.is_completed) if item.id == sticker_id else item
                for item in items
            ],
            persist=lambda: self.call(toggle_sticker, sticker_id),
        )

    def edit(self, sticker_id: int, text: str) -> None:
        self.updates.run(
            apply=lambda items: [
                replace(item, text=text.strip()) if item.id == sticker_id else item
                for item in items
            ],
            persist=lambda: self.call(update_sticker, sticker_id, text),
        )

    def remove(self, sticker_id: int) -> None:
        self.updates.run(
            apply=lambda items: [item for item in items if item.id != sticker_id],
            persist=lambda: self.call(delete_sticker, sticker_id),
        )
