"""Exact, prefix, suffix and whole-line matching with relevance scoring.

These functions assume that the pattern is already lower case when
matching is case insensitive, and already normalized when normalization
is on. Matched positions are never returned; the result carries the
start and end offsets instead.
"""

from __future__ import annotations

from fuzzyfind.fuzzy import (
    BONUS_BOUNDARY,
    BONUS_FIRST_CHAR_MULTIPLIER,
    NO_MATCH,
    SCORE_MATCH,
    MatchResult,
    ascii_fuzzy_index,
    bonus_at,
    calculate_score,
    fold_case,
    to_lower,
)
from fuzzyfind.normalize import normalize_rune

# Characters that str.isspace accepts but that are not white space proper.
_NOT_SPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_space(char: str) -> bool:
    return char not in _NOT_SPACE and char.isspace()


def _leading_whitespaces(text: str) -> int:
    count = 0
    for char in text:
        if not _is_space(char):
            break
        count += 1
    return count


def _trailing_whitespaces(text: str) -> int:
    count = 0
    for char in reversed(text):
        if not _is_space(char):
            break
        count += 1
    return count


def _index_at(index: int, size: int, forward: bool) -> int:
    return index if forward else size - index - 1


def _prepare(char: str, case_sensitive: bool, normalize: bool) -> str:
    if not case_sensitive:
        char = to_lower(char)
    if normalize:
        char = normalize_rune(char)
    return char


def exact_match_naive(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> MatchResult:
    """Find the occurrence of ``pattern`` whose first character earns the most bonus."""
    if not pattern:
        return MatchResult(0, 0, 0)

    len_text = len(text)
    len_pattern = len(pattern)
    if len_text < len_pattern:
        return NO_MATCH
    if ascii_fuzzy_index(text, pattern, case_sensitive) < 0:
        return NO_MATCH

    pidx = 0
    best_pos, bonus, best_bonus = -1, 0, -1
    index = 0
    while index < len_text:
        text_idx = _index_at(index, len_text, forward)
        char = text[text_idx]
        if not case_sensitive:
            char = fold_case(char)
        if normalize:
            char = normalize_rune(char)
        pattern_idx = _index_at(pidx, len_pattern, forward)
        if pattern[pattern_idx] == char:
            if pattern_idx == 0:
                bonus = bonus_at(text, text_idx)
            pidx += 1
            if pidx == len_pattern:
                if bonus > best_bonus:
                    best_pos, best_bonus = index, bonus
                if bonus == BONUS_BOUNDARY:
                    break
                index -= pidx - 1
                pidx, bonus = 0, 0
        else:
            index -= pidx
            pidx, bonus = 0, 0
        index += 1

    if best_pos < 0:
        return NO_MATCH
    if forward:
        sidx = best_pos - len_pattern + 1
        eidx = best_pos + 1
    else:
        sidx = len_text - (best_pos + 1)
        eidx = len_text - (best_pos - len_pattern + 1)
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, sidx, eidx, False)
    return MatchResult(sidx, eidx, score)


def prefix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> MatchResult:
    """Match ``pattern`` at the start of ``text``, ignoring leading white space
    unless the pattern itself starts with it."""
    if not pattern:
        return MatchResult(0, 0, 0)

    trimmed = 0 if _is_space(pattern[0]) else _leading_whitespaces(text)
    if len(text) - trimmed < len(pattern):
        return NO_MATCH

    for offset, pchar in enumerate(pattern):
        if _prepare(text[trimmed + offset], case_sensitive, normalize) != pchar:
            return NO_MATCH

    end = trimmed + len(pattern)
    score, _ = calculate_score(case_sensitive, normalize, text, pattern, trimmed, end, False)
    return MatchResult(trimmed, end, score)


def suffix_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> MatchResult:
    """Match ``pattern`` at the end of ``text``, ignoring trailing white space
    unless the pattern itself ends with it."""
    trimmed = len(text)
    if not pattern or not _is_space(pattern[-1]):
        trimmed -= _trailing_whitespaces(text)
    if not pattern:
        return MatchResult(trimmed, trimmed, 0)

    diff = trimmed - len(pattern)
    if diff < 0:
        return NO_MATCH

    for offset, pchar in enumerate(pattern):
        if _prepare(text[diff + offset], case_sensitive, normalize) != pchar:
            return NO_MATCH

    score, _ = calculate_score(case_sensitive, normalize, text, pattern, diff, trimmed, False)
    return MatchResult(diff, trimmed, score)


def equal_match(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> MatchResult:
    """Match when ``text``, stripped of surrounding white space, equals ``pattern``."""
    len_pattern = len(pattern)
    if len_pattern == 0:
        return NO_MATCH

    lead = 0 if _is_space(pattern[0]) else _leading_whitespaces(text)
    trail = 0 if _is_space(pattern[-1]) else _trailing_whitespaces(text)
    if len(text) - lead - trail != len_pattern:
        return NO_MATCH

    if normalize:
        matched = True
        for offset, pchar in enumerate(pattern):
            char = text[lead + offset]
            if not case_sensitive:
                char = to_lower(char)
            if normalize_rune(pchar) != normalize_rune(char):
                matched = False
                break
    else:
        body = text[lead : len(text) - trail]
        if not case_sensitive:
            body = body.lower()
        matched = body == pattern

    if not matched:
        return NO_MATCH
    score = (SCORE_MATCH + BONUS_BOUNDARY) * len_pattern + (
        BONUS_FIRST_CHAR_MULTIPLIER - 1
    ) * BONUS_BOUNDARY
    return MatchResult(lead, lead + len_pattern, score)