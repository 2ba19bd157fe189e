# mediacat/database/models/media.py
from __future__ import annotations

from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import (
    Float, ForeignKey, Integer, Text, TypeDecorator,
    UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mediacat.database.core.main import Base
from mediacat.database.core.service_object import ServiceObject
from mediacat.domain.enums.media_type import MediaType

if TYPE_CHECKING:
    from .taxonomy import MediaTag


class MediaTypeText(TypeDecorator):
    """
    MediaType persisted as plain text.

    Writes the enum value ('unknown' for MediaType.unknown, never '');
    reads anything unrecognised, including '' and NULL, as MediaType.unknown.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return MediaType.from_stored(value).value

    def process_result_value(self, value, dialect):
        return MediaType.from_stored(value)


class BasePath(ServiceObject, Base):
    __tablename__ = "base_paths"
    __table_args__ = (
        UniqueConstraint("base_path", name="uq_base_paths_base_path"),
    )

    base_path: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    media: Mapped[List["MediaFile"]] = relationship(back_populates="base_path", passive_deletes="all")


class MediaFile(ServiceObject, Base):
    __tablename__ = "media"
    __table_args__ = (
        UniqueConstraint("base_path_id", "relative_path", name="uq_media_base_path_relative_path"),
        CheckConstraint("size > 0", name="size_positive"),
        CheckConstraint("mark IS NULL OR (mark BETWEEN 1 AND 10)", name="mark_1_10"),
        Index("ix_media_base_path_id", "base_path_id"),
    )

    relative_path: Mapped[str] = mapped_column(Text, nullable=False)
    base_path_id: Mapped[int] = mapped_column(
        ForeignKey("base_paths.id", ondelete="RESTRICT"), nullable=False
    )

    # technical
    width: Mapped[Optional[int]] = mapped_column(Integer)
    height: Mapped[Optional[int]] = mapped_column(Integer)
    size: Mapped[float] = mapped_column(Float, nullable=False)   # kB

    # curation
    mark: Mapped[Optional[int]] = mapped_column(Integer)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    media_type: Mapped[MediaType] = mapped_column(
        MediaTypeText, nullable=False, default=MediaType.unknown, server_default=MediaType.unknown.value
    )

    # relationships
    base_path: Mapped[BasePath] = relationship(back_populates="media")
    tag_links: Mapped[List["MediaTag"]] = relationship(back_populates="media", passive_deletes="all")
