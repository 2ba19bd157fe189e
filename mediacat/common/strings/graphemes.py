# mediacat/common/strings/graphemes.py
from __future__ import annotations

import regex

_grapheme_re = regex.compile(r"\X")


def grapheme_len(text: str | None) -> int:
    r"""
    Number of user-perceived characters (extended grapheme clusters).

      "abc"                  -> 3
      "e\u0301"              -> 1   (e + combining acute)
      "\U0001F44D\U0001F3FD" -> 1   (emoji + skin tone modifier)
    """
    if not text:
        return 0
    return len(_grapheme_re.findall(text))
