# mediacat/domain/errors.py
from __future__ import annotations

from enum import StrEnum
from typing import Optional


class ErrorKind(StrEnum):
    # identifiers / lookups
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"

    # base paths & configuration
    INVALID_PATH = "invalid_path"
    NOT_EXISTS = "not_exists"
    NOT_A_DIRECTORY = "not_a_directory"
    NOT_ABSOLUTE = "not_absolute"
    IS_SUB_PATH = "is_sub_path"

    # conflicts / state protection
    ALREADY_EXISTS = "already_exists"
    IN_USE = "in_use"

    # text fields
    INVALID_NAME = "invalid_name"
    NAME_TOO_LONG = "name_too_long"
    DESCRIPTION_TOO_LONG = "description_too_long"
    INVALID_COLOR = "invalid_color"
    SEARCH_TOO_SHORT = "search_too_short"

    # tags -> categories
    INVALID_CATEGORY_ID = "invalid_category_id"
    CATEGORY_NOT_FOUND = "category_not_found"
    CATEGORY_ERROR = "category_error"

    # media
    INVALID_RELATIVE_PATH = "invalid_relative_path"
    INVALID_BASE_PATH_ID = "invalid_base_path_id"
    INVALID_WIDTH = "invalid_width"
    INVALID_HEIGHT = "invalid_height"
    INVALID_SIZE = "invalid_size"
    INVALID_MARK = "invalid_mark"
    BASE_PATH_ERROR = "base_path_error"
    TAG_ERROR = "tag_error"
    ALREADY_TAGGED = "already_tagged"
    NOT_TAGGED = "not_tagged"
    NO_TAGS_PROVIDED = "no_tags_provided"

    # infrastructure
    STORAGE = "storage"


class CatalogError(Exception):
    """
    Base for every error raised by the catalog layer.

    `kind` says what went wrong; referential errors keep the dependency's
    own error as `__cause__` (raised with `raise ... from err`).
    """

    def __init__(self, kind: ErrorKind, message: Optional[str] = None) -> None:
        self.kind = kind
        self.message = message or kind.value.replace("_", " ")
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name}, {self.message!r})"


class BasePathError(CatalogError):
    pass


class CategoryError(CatalogError):
    pass


class TagError(CatalogError):
    pass


class MediaError(CatalogError):
    pass


class ConfigError(CatalogError):
    """Invalid database location or settings."""
