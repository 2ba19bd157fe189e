# mediacat/database/repos/media_repo.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from mediacat.database.models.media import MediaFile as DBMediaFile
from mediacat.domain.enums.media_type import MediaType

# Only these columns may change after creation
UPDATABLE_FIELDS = frozenset({"width", "height", "size", "mark", "description"})


class SqlAlchemyMediaRepo:
    """
    SQLAlchemy-backed repository for media rows.

    The repo never flushes or commits on its own except where an id is
    needed; the caller's transaction boundary controls commit.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, media_id: int) -> Optional[DBMediaFile]:
        return self.db.get(DBMediaFile, media_id)

    def get_by_relative_path(self, base_path_id: int, relative_path: str) -> Optional[DBMediaFile]:
        stmt = (
            select(DBMediaFile)
            .where(
                DBMediaFile.base_path_id == base_path_id,
                DBMediaFile.relative_path == relative_path,
            )
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def exists_relative_path(self, base_path_id: int, relative_path: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(DBMediaFile)
            .where(
                DBMediaFile.base_path_id == base_path_id,
                DBMediaFile.relative_path == relative_path,
            )
        )
        return (self.db.execute(stmt).scalar_one() or 0) > 0

    def create_media_file(
        self,
        *,
        relative_path: str,
        base_path_id: int,
        size: float,
        width: Optional[int] = None,
        height: Optional[int] = None,
        mark: Optional[int] = None,
        description: str = "",
        media_type: MediaType = MediaType.unknown,
    ) -> DBMediaFile:
        orm = DBMediaFile(
            relative_path=relative_path,
            base_path_id=base_path_id,
            width=width,
            height=height,
            size=size,
            mark=mark,
            description=description,
            media_type=media_type,
        )
        self.db.add(orm)
        return orm

    def update_media_file(self, orm: DBMediaFile, updates: Mapping[str, Any]) -> DBMediaFile:
        for k, v in updates.items():
            if k not in UPDATABLE_FIELDS:
                raise ValueError(f"{k} cannot be updated")
            setattr(orm, k, v)
        return orm

    def delete_media_file(self, orm: DBMediaFile) -> None:
        self.db.delete(orm)
