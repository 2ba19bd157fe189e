# mediacat/database/repos/category_repo.py
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from mediacat.common.iter import chunked, unique_ids
from mediacat.database.models.taxonomy import Tag as DBTag, TagCategory as DBTagCategory

_IN_CHUNK = 500


class CategoryRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, category_id: int) -> Optional[DBTagCategory]:
        return self.db.get(DBTagCategory, category_id)

    def list(self, ids: Iterable[int] | None = None) -> List[DBTagCategory]:
        wanted = unique_ids(ids)
        if not wanted:
            stmt = select(DBTagCategory).order_by(DBTagCategory.id.asc())
            return list(self.db.execute(stmt).scalars().all())
        rows: List[DBTagCategory] = []
        for chunk in chunked(wanted, _IN_CHUNK):
            stmt = select(DBTagCategory).where(DBTagCategory.id.in_(chunk))
            rows.extend(self.db.execute(stmt).scalars().all())
        return sorted(rows, key=lambda r: r.id)

    def create(self, *, name: str, color: str, description: str) -> DBTagCategory:
        obj = DBTagCategory(name=name, color=color, description=description)
        self.db.add(obj)
        return obj

    def count_tags(self, category_id: int) -> int:
        stmt = select(func.count()).select_from(DBTag).where(DBTag.category_id == category_id)
        return int(self.db.execute(stmt).scalar_one() or 0)

    def delete(self, obj: DBTagCategory) -> None:
        self.db.delete(obj)
