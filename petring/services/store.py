import logging
from typing import Generic, Iterable, Optional, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from petring.core.errors import AlreadyExists, NotFound


logger = logging.getLogger(__name__)

M = TypeVar("M")


class RecordStore(Generic[M]):
    """
    Member/ad persistence behind the small interface the ring and the
    management services use. Works for any model with `id`, `username`,
    `discord_id` and `verified` columns.
    """

    def __init__(self, db: Session, model: Type[M]):
        self.db = db
        self.model = model

    def find_by_username(self, username: str) -> Optional[M]:
        return self.db.execute(
            select(self.model).where(self.model.username == username)
        ).scalar_one_or_none()

    def find_by_discord_id(self, discord_id: int) -> Optional[M]:
        return self.db.execute(
            select(self.model).where(self.model.discord_id == discord_id)
        ).scalar_one_or_none()

    def list_all(self, verified: Optional[bool] = None) -> list[M]:
        stmt = select(self.model).order_by(self.model.id.asc())
        if verified is not None:
            stmt = stmt.where(self.model.verified == verified)
        return list(self.db.execute(stmt).scalars().all())

    def resolve_many(
        self,
        discord_ids: Optional[Iterable[int]] = None,
        usernames: Optional[Iterable[str]] = None,
    ) -> list[M]:
        """
        Look up every requested record before anything is deleted, so one
        unknown entry aborts the whole batch. Duplicates collapse.
        """
        found: dict[int, M] = {}
        for discord_id in discord_ids or []:
            record = self.find_by_discord_id(discord_id)
            if not record:
                raise NotFound(f"No record for discord id {discord_id}")
            found[record.id] = record
        for username in usernames or []:
            record = self.find_by_username(username)
            if not record:
                raise NotFound(f"No record for username {username}")
            found[record.id] = record
        return [found[record_id] for record_id in sorted(found)]

    def insert(self, record: M, conflict_message: Optional[str] = None) -> M:
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExists(conflict_message)
        self.db.refresh(record)
        return record

    def update(self, record: M, conflict_message: Optional[str] = None) -> M:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyExists(conflict_message)
        self.db.refresh(record)
        return record

    def delete(self, record_id: int) -> None:
        result = self.db.execute(delete(self.model).where(self.model.id == record_id))
        if not result.rowcount:
            self.db.rollback()
            raise NotFound()
        self.db.commit()

    def delete_many(self, record_ids: Iterable[int]) -> int:
        ids = list(record_ids)
        if not ids:
            return 0
        result = self.db.execute(delete(self.model).where(self.model.id.in_(ids)))
        self.db.commit()
        return int(result.rowcount or 0)
