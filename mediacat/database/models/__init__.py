# mediacat/database/models/__init__.py

from mediacat.database.models.media import (
    Base,
    BasePath,
    MediaFile,
    MediaTypeText,
)
from mediacat.database.models.taxonomy import (
    TagCategory,
    Tag,
    MediaTag,
)

__all__ = [
    "Base",
    "BasePath",
    "MediaFile",
    "MediaTypeText",
    "TagCategory",
    "Tag",
    "MediaTag",
]
