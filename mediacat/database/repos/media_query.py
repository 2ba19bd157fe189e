# mediacat/database/repos/media_query.py
from __future__ import annotations
from typing import Collection, List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from mediacat.database.models import MediaFile as DBMediaFile, MediaTag as DBMediaTag


class MediaQueryRepo:
    """
    Read-only queries over media rows.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_base_path(self, base_path_id: int) -> List[DBMediaFile]:
        stmt = (
            select(DBMediaFile)
            .where(DBMediaFile.base_path_id == base_path_id)
            .order_by(DBMediaFile.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def ids_tagged_with_all(self, tag_ids: Collection[int]):
        """
        Subquery of media ids carrying *every* tag in `tag_ids`:

            SELECT media_id FROM media_tags
            WHERE tag_id IN (:tag_ids)
            GROUP BY media_id
            HAVING COUNT(DISTINCT tag_id) = :n

        `tag_ids` must already be deduplicated.
        """
        mt = DBMediaTag
        return (
            select(mt.media_id)
            .where(mt.tag_id.in_(list(tag_ids)))
            .group_by(mt.media_id)
            .having(func.count(func.distinct(mt.tag_id)) == len(tag_ids))
        )

    def list_tagged_with_all(self, tag_ids: Collection[int]) -> List[DBMediaFile]:
        if not tag_ids:
            return []
        stmt = (
            select(DBMediaFile)
            .where(DBMediaFile.id.in_(self.ids_tagged_with_all(tag_ids)))
            .order_by(DBMediaFile.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
