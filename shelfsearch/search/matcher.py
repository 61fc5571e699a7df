"""Query-to-field relevance scoring.

Strategies are tried from most to least confident:
- exact match of the whole (trimmed) strings
- whole query as a phrase on word boundaries
- whole query as a plain substring
- token matching (exact, prefix, reverse prefix, fuzzy) with a bonus for
  tokens matched in sequence and a penalty for very short queries against
  long texts

Containment is only tested for the query as a whole, so a single-word
literal prefix ("nurs" in "nursing") is a substring hit, while reordered,
punctuated or misspelled multi-word queries fall through to token matching.
"""
from __future__ import annotations

import re
from typing import Optional, Sequence

from .similarity import string_similarity, tokenize


EXACT_SCORE = 1.0
PHRASE_SCORE = 0.95
SUBSTRING_SCORE = 0.85

EXACT_TOKEN_WEIGHT = 1.0
PREFIX_WEIGHT_FLOOR = 0.7
FUZZY_SIMILARITY_THRESHOLD = 0.8
CONSECUTIVE_BONUS = 0.1


def _contains_phrase(text: str, phrase: str) -> bool:
    pattern = r"(?<!\w)" + re.escape(phrase) + r"(?!\w)"
    return re.search(pattern, text, flags=re.ASCII) is not None


def token_weight(query_token: str, text_token: str) -> float:
    """Weight of a single query token against a single text token."""
    if query_token == text_token:
        return EXACT_TOKEN_WEIGHT

    lq = len(query_token)
    lt = len(text_token)

    if lq >= 3 and text_token.startswith(query_token):
        return 0.85 + 0.1 * (lq / lt)

    if lt >= 3 and query_token.startswith(text_token):
        return 0.7 + 0.1 * (lt / lq)

    if lq >= 4 and lt >= 4:
        sim = string_similarity(query_token, text_token)
        if sim > FUZZY_SIMILARITY_THRESHOLD:
            return sim * 0.6

    return 0.0


def _best_match(
    query_token: str,
    text_tokens: Sequence[str],
    prev_pos: Optional[int],
) -> tuple[float, Optional[int]]:
    best = 0.0
    best_pos: Optional[int] = None
    for pos, text_token in enumerate(text_tokens):
        w = token_weight(query_token, text_token)
        if w <= 0.0:
            continue
        if w > best:
            best, best_pos = w, pos
        elif w == best and prev_pos is not None and pos == prev_pos + 1:
            # Equal weight: prefer the position that continues the phrase.
            best_pos = pos
    return best, best_pos


def token_score(query_tokens: Sequence[str], text_tokens: Sequence[str]) -> float:
    """Aggregate token-level score before the length penalty."""
    if not query_tokens or not text_tokens:
        return 0.0

    exact_hits = 0
    prefix_sum = 0.0
    fuzzy_sum = 0.0
    bonus = 0.0
    prev_pos: Optional[int] = None

    for tok in query_tokens:
        weight, pos = _best_match(tok, text_tokens, prev_pos)
        if weight == EXACT_TOKEN_WEIGHT:
            exact_hits += 1
        elif weight >= PREFIX_WEIGHT_FLOOR:
            prefix_sum += weight
        elif weight > 0.0:
            fuzzy_sum += weight

        if pos is not None and prev_pos is not None and pos == prev_pos + 1:
            bonus += CONSECUTIVE_BONUS
        prev_pos = pos

    n = float(len(query_tokens))
    exact_score = (exact_hits / n) * 0.7
    prefix_score = (prefix_sum / n) * 0.5
    fuzzy_score = (fuzzy_sum / n) * 0.3
    return exact_score + prefix_score + fuzzy_score + bonus


def length_penalty(query: str, text: str) -> float:
    if not text:
        return 1.0
    ratio = len(query) / len(text)
    if ratio < 0.1:
        return 0.7
    if ratio < 0.2:
        return 0.85
    return 1.0


def match_score(query: str, text: str) -> float:
    """Similarity between a query and one text field, in [0, 1].

    Empty or blank input on either side scores 0.
    """
    q = (query or "").strip().casefold()
    t = (text or "").strip().casefold()
    if not q or not t:
        return 0.0

    if q == t:
        return EXACT_SCORE
    if _contains_phrase(t, q):
        return PHRASE_SCORE
    if q in t:
        return SUBSTRING_SCORE

    base = token_score(tokenize(q), tokenize(t))
    if base <= 0.0:
        return 0.0
    return min(base * length_penalty(q, t), 1.0)
