from mediacat.services.schemas.media import (
    MediaCreate,
    MediaPatch,
)
from mediacat.services.schemas.tags import (
    CategoryCreate,
    CategoryUpdate,
    TagCreate,
    TagUpdate,
)
__all__ = [
    "MediaCreate",
    "MediaPatch",
    "CategoryCreate",
    "CategoryUpdate",
    "TagCreate",
    "TagUpdate",
]
