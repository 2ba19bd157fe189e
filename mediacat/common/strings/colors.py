# mediacat/common/strings/colors.py
from __future__ import annotations

import re
from typing import Optional

_hex_re = re.compile(r"#?(?:[0-9a-f]{6}|[0-9a-f]{8})")


def normalize_hex_color(value: str | None) -> Optional[str]:
    """
    Validate a hex colour and return its stored form: lowercase with a
    leading "#".

    Accepts "rrggbb" or "rrggbbaa", with or without the "#", in any case.
    Returns None when the value is not a hex colour.
    """
    if value is None:
        return None
    s = value.strip().lower()
    if not _hex_re.fullmatch(s):
        return None
    return "#" + s.lstrip("#")
