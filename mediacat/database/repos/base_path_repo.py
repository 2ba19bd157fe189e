# mediacat/database/repos/base_path_repo.py
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from mediacat.common.iter import chunked, unique_ids
from mediacat.database.models.media import BasePath as DBBasePath, MediaFile as DBMediaFile

# keep IN (...) lists well under SQLite's bound-parameter limit
_IN_CHUNK = 500


class BasePathRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, base_path_id: int) -> Optional[DBBasePath]:
        return self.db.get(DBBasePath, base_path_id)

    def get_by_path(self, path: str) -> Optional[DBBasePath]:
        stmt = select(DBBasePath).where(DBBasePath.base_path == path).limit(1)
        return self.db.execute(stmt).scalars().first()

    def list(self, ids: Iterable[int] | None = None) -> List[DBBasePath]:
        """All rows ordered by id; when `ids` is non-empty only those ids."""
        wanted = unique_ids(ids)
        if not wanted:
            stmt = select(DBBasePath).order_by(DBBasePath.id.asc())
            return list(self.db.execute(stmt).scalars().all())
        rows: List[DBBasePath] = []
        for chunk in chunked(wanted, _IN_CHUNK):
            stmt = select(DBBasePath).where(DBBasePath.id.in_(chunk))
            rows.extend(self.db.execute(stmt).scalars().all())
        return sorted(rows, key=lambda r: r.id)

    def all_paths(self) -> List[str]:
        return list(self.db.execute(select(DBBasePath.base_path)).scalars().all())

    def create(self, *, path: str, description: str) -> DBBasePath:
        obj = DBBasePath(base_path=path, description=description)
        self.db.add(obj)
        return obj

    def count_media(self, base_path_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(DBMediaFile)
            .where(DBMediaFile.base_path_id == base_path_id)
        )
        return int(self.db.execute(stmt).scalar_one() or 0)

    def delete(self, obj: DBBasePath) -> None:
        self.db.delete(obj)
