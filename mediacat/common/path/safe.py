# mediacat/common/path/safe.py
from __future__ import annotations

import os
from pathlib import Path


def normalize_base_path(raw: str) -> str:
    """
    Canonical string form of a registered root:
      - surrounding whitespace trimmed
      - trailing '/' removed (the filesystem root itself stays '/')
    Returns '' when nothing is left.
    """
    p = (raw or "").strip()
    if not p:
        return ""
    stripped = p.rstrip("/")
    return stripped or "/"


def normalize_relative_path(raw: str) -> str:
    """Strip whitespace and any leading/trailing '/' from a media path."""
    return (raw or "").strip().strip("/")


def overlaps(a: str, b: str) -> bool:
    """
    True when either normalized root is a string prefix of the other.
    Registered roots may not overlap this way, so '/a/b' also blocks '/a/bc'.
    """
    return a.startswith(b) or b.startswith(a)


def safe_join(root: Path | str, rel: Path | str) -> Path:
    """
    Join 'root' and a relative path safely, ensuring the result stays inside 'root'.
    Raises ValueError if traversal escapes the root.
    """
    r = Path(root).expanduser().resolve()
    p = (r / str(rel)).resolve()
    try:
        p.relative_to(r)
    except ValueError as exc:
        if not str(p).startswith(str(r) + os.sep):
            raise ValueError(f"path {p} escapes root {r}") from exc
    return p
