# mediacat/common/iter.py
from __future__ import annotations

from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def chunked(it: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield fixed-size lists from an iterable (last chunk may be smaller)."""
    if size <= 0:
        raise ValueError("size must be > 0")
    buf: list[T] = []
    for x in it:
        buf.append(x)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf


def unique_ids(ids: Iterable[int] | None) -> list[int]:
    """Deduplicate ids while keeping first-seen order; None -> []."""
    if ids is None:
        return []
    seen: set[int] = set()
    out: list[int] = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out
