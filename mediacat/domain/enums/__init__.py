from mediacat.domain.enums.media_type import MediaType
__all__ = [
    "MediaType",
]
