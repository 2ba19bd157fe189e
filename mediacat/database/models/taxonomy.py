# mediacat/database/models/taxonomy.py
from __future__ import annotations

from typing import List, TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mediacat.database.core.main import Base
from mediacat.database.core.service_object import ServiceObject

if TYPE_CHECKING:
    from .media import MediaFile


# =======================
# Tag categories
# =======================
class TagCategory(ServiceObject, Base):
    __tablename__ = "tag_categories"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str] = mapped_column(String(9), nullable=False)   # '#rrggbb' / 'rrggbbaa'
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    tags: Mapped[List["Tag"]] = relationship(back_populates="category", passive_deletes="all")


# =======================
# Tags
# =======================
class Tag(ServiceObject, Base):
    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("name", "category_id", name="uq_tags_name_category_id"),
        Index("ix_tags_category_id", "category_id"),
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("tag_categories.id", ondelete="RESTRICT"), nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    category: Mapped["TagCategory"] = relationship(back_populates="tags")
    media_links: Mapped[List["MediaTag"]] = relationship(back_populates="tag", passive_deletes="all")


class MediaTag(ServiceObject, Base):
    __tablename__ = "media_tags"
    __table_args__ = (
        UniqueConstraint("media_id", "tag_id", name="uq_media_tags_media_id_tag_id"),
        Index("ix_media_tags_tag_id", "tag_id"),
    )

    media_id: Mapped[int] = mapped_column(
        ForeignKey("media.id", ondelete="RESTRICT"), nullable=False
    )
    tag_id: Mapped[int] = mapped_column(
        ForeignKey("tags.id", ondelete="RESTRICT"), nullable=False
    )

    media: Mapped["MediaFile"] = relationship(back_populates="tag_links")
    tag: Mapped["Tag"] = relationship(back_populates="media_links")
