# mediacat/domain/policies/text_limits.py
from __future__ import annotations

from typing import Type

from mediacat.common.strings.graphemes import grapheme_len
from mediacat.domain.errors import CatalogError, ErrorKind

MAX_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 300
MIN_SEARCH_LENGTH = 3


def check_name(name: str, error_cls: Type[CatalogError], *, max_len: int = MAX_NAME_LENGTH) -> None:
    if not name:
        raise error_cls(ErrorKind.INVALID_NAME, "name must not be empty")
    if grapheme_len(name) > max_len:
        raise error_cls(ErrorKind.NAME_TOO_LONG, f"name is longer than {max_len} characters")


def check_description(
    description: str,
    error_cls: Type[CatalogError],
    *,
    max_len: int = MAX_DESCRIPTION_LENGTH,
) -> None:
    if grapheme_len(description) > max_len:
        raise error_cls(
            ErrorKind.DESCRIPTION_TOO_LONG,
            f"description is longer than {max_len} characters",
        )


def check_search_prefix(
    prefix: str,
    error_cls: Type[CatalogError],
    kind: ErrorKind = ErrorKind.SEARCH_TOO_SHORT,
    *,
    min_len: int = MIN_SEARCH_LENGTH,
) -> str:
    """Return the trimmed prefix, or raise `kind` if it is too short."""
    p = (prefix or "").strip()
    if grapheme_len(p) < min_len:
        raise error_cls(kind, f"search needs at least {min_len} characters")
    return p


def starts_with_ci(value: str, prefix: str) -> bool:
    return value.casefold().startswith(prefix.casefold())
