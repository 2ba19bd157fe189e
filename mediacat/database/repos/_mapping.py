# mediacat/database/repos/_mapping.py
from __future__ import annotations
from mediacat.database.models.media import BasePath as DBBasePath, MediaFile as DBMediaFile
from mediacat.database.models.taxonomy import (
    MediaTag as DBMediaTag,
    Tag as DBTag,
    TagCategory as DBTagCategory,
)
from mediacat.domain.entities.base_path import BasePath
from mediacat.domain.entities.links.media_tag_link import MediaTagLink
from mediacat.domain.entities.media_file import MediaFile
from mediacat.domain.entities.tag import Category, Tag
from mediacat.domain.enums.media_type import MediaType


def to_domain_base_path(row: DBBasePath) -> BasePath:
    return BasePath(id=row.id, path=row.base_path, description=row.description or "")


def to_domain_category(row: DBTagCategory) -> Category:
    return Category(id=row.id, name=row.name, color=row.color, description=row.description or "")


def to_domain_tag(row: DBTag) -> Tag:
    return Tag(id=row.id, name=row.name, category_id=row.category_id, description=row.description or "")


def to_domain_media_file(row: DBMediaFile) -> MediaFile:
    return MediaFile(
        id=row.id,
        relative_path=row.relative_path,
        base_path_id=row.base_path_id,
        width=row.width,
        height=row.height,
        size=float(row.size),
        mark=row.mark,
        description=row.description or "",
        media_type=MediaType.from_stored(row.media_type),
    )


def to_domain_media_tag(row: DBMediaTag) -> MediaTagLink:
    return MediaTagLink(id=row.id, media_id=row.media_id, tag_id=row.tag_id)
