from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein


# ASCII-only on purpose: characters outside basic Latin split tokens.
_WORD_RE = re.compile(r"\w{2,}", re.ASCII)


def tokenize(text: str) -> list[str]:
    """Split text into lower-cased word tokens of length >= 2.

    Tokens keep their order and duplicates; positions matter for the
    consecutive-match bonus in the matcher.
    """
    t = (text or "").casefold()
    if not t:
        return []
    return _WORD_RE.findall(t)


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance with unit insert/delete/substitute costs."""
    return int(Levenshtein.distance(a, b))


def string_similarity(a: str, b: str) -> float:
    """Normalized edit similarity in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein(a, b)) / longest
