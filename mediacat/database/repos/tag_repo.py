from __future__ import annotations
from typing import Optional, List
from sqlalchemy import select, and_, func, delete
from sqlalchemy.orm import Session

from mediacat.database.models.taxonomy import Tag, MediaTag


class TagRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    # ----- tags -----
    def get(self, tag_id: int) -> Optional[Tag]:
        return self.db.get(Tag, tag_id)

    def find(self, name: str, category_id: int, *, exclude_id: Optional[int] = None) -> Optional[Tag]:
        """
        Tag with exactly this (name, category_id) pair, optionally ignoring
        one id (the tag being updated).
        """
        stmt = select(Tag).where(and_(Tag.name == name, Tag.category_id == category_id))
        if exclude_id is not None:
            stmt = stmt.where(Tag.id != exclude_id)
        return self.db.execute(stmt.limit(1)).scalars().first()

    def list_tags(self, category_id: Optional[int] = None) -> List[Tag]:
        stmt = select(Tag)
        if category_id is not None:
            stmt = stmt.where(Tag.category_id == category_id)
        return list(self.db.execute(stmt.order_by(Tag.name.asc(), Tag.id.asc())).scalars().all())

    def create_tag(self, *, name: str, category_id: int, description: str) -> Tag:
        t = Tag(name=name, category_id=category_id, description=description)
        self.db.add(t)
        return t

    def delete_tag(self, tag: Tag) -> None:
        self.db.delete(tag)

    # ----- media links -----
    def get_link(self, media_id: int, tag_id: int) -> Optional[MediaTag]:
        stmt = select(MediaTag).where(
            and_(MediaTag.media_id == media_id, MediaTag.tag_id == tag_id)
        ).limit(1)
        return self.db.execute(stmt).scalars().first()

    def add_tag_to_media(self, media_id: int, tag_id: int) -> MediaTag:
        # uniqueness also enforced by constraint (uq_media_tags_media_id_tag_id)
        link = MediaTag(media_id=media_id, tag_id=tag_id)
        self.db.add(link)
        return link

    def remove_tag_from_media(self, media_id: int, tag_id: int) -> int:
        res = self.db.execute(
            delete(MediaTag).where(and_(MediaTag.media_id == media_id, MediaTag.tag_id == tag_id))
        )
        return int(res.rowcount or 0)

    def count_links_for_tag(self, tag_id: int) -> int:
        stmt = select(func.count()).select_from(MediaTag).where(MediaTag.tag_id == tag_id)
        return int(self.db.execute(stmt).scalar_one() or 0)

    def count_links_for_media(self, media_id: int) -> int:
        stmt = select(func.count()).select_from(MediaTag).where(MediaTag.media_id == media_id)
        return int(self.db.execute(stmt).scalar_one() or 0)

    def list_for_media(self, media_id: int) -> List[Tag]:
        """
        Tags for a single media file, by name.
        """
        stmt = (
            select(Tag)
            .join(MediaTag, MediaTag.tag_id == Tag.id)
            .where(MediaTag.media_id == media_id)
            .order_by(Tag.name.asc(), Tag.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())
