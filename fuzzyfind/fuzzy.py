"""Fuzzy matching of a pattern against a line of text, with relevance scoring.

Two algorithms are provided. :func:`fuzzy_match_v1` finds the first
occurrence of the pattern in linear time and then shortens it by scanning
backwards. :func:`fuzzy_match_v2` is a modified Smith-Waterman search that
finds the occurrence with the highest score. Omitting or mismatching a
pattern character is not allowed.

Scoring favours matches at word boundaries and camelCase humps. It rewards
consecutive runs of matched characters and penalises gaps. Match functions
assume that the pattern is already lower case when matching is case
insensitive, and already normalized when normalization is on.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import IntEnum

from fuzzyfind.normalize import normalize_rune

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

# Chosen so that the bonus is cancelled once the gap between acronym letters
# grows beyond about eight characters.
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
# camelCase and letter-to-digit transitions carry no one-character gap, so
# they earn slightly less than a real word boundary.
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_MAX_ASCII = 0x7F


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one match attempt.

    ``start`` and ``end`` are -1 when there is no match. ``positions`` holds
    the matched character indices when they were requested.
    """

    start: int
    end: int
    score: int
    positions: tuple[int, ...] | None = None

    @property
    def matched(self) -> bool:
        return self.start >= 0


NO_MATCH = MatchResult(-1, -1, 0)


class CharClass(IntEnum):
    NON_WORD = 0
    LOWER = 1
    UPPER = 2
    LETTER = 3
    NUMBER = 4


def _ascii_class(char: str) -> CharClass:
    if "a" <= char <= "z":
        return CharClass.LOWER
    if "A" <= char <= "Z":
        return CharClass.UPPER
    if "0" <= char <= "9":
        return CharClass.NUMBER
    return CharClass.NON_WORD


def _non_ascii_class(char: str) -> CharClass:
    category = unicodedata.category(char)
    if category == "Ll":
        return CharClass.LOWER
    if category == "Lu":
        return CharClass.UPPER
    if category.startswith("N"):
        return CharClass.NUMBER
    if category.startswith("L"):
        return CharClass.LETTER
    return CharClass.NON_WORD


def char_class_of(char: str) -> CharClass:
    """Classify a single character for bonus computation."""
    if ord(char) <= _MAX_ASCII:
        return _ascii_class(char)
    return _non_ascii_class(char)


def bonus_for(prev_class: CharClass, char_class: CharClass) -> int:
    """Bonus for a character of ``char_class`` following one of ``prev_class``."""
    if prev_class == CharClass.NON_WORD and char_class != CharClass.NON_WORD:
        return BONUS_BOUNDARY
    if (prev_class == CharClass.LOWER and char_class == CharClass.UPPER) or (
        prev_class != CharClass.NUMBER and char_class == CharClass.NUMBER
    ):
        return BONUS_CAMEL123
    if char_class == CharClass.NON_WORD:
        return BONUS_NON_WORD
    return 0


def bonus_at(text: str, idx: int) -> int:
    """Bonus for the character of ``text`` at ``idx``."""
    if idx == 0:
        return BONUS_BOUNDARY
    return bonus_for(char_class_of(text[idx - 1]), char_class_of(text[idx]))


def to_lower(char: str) -> str:
    """Simple one-to-one lower-case mapping of a single character."""
    lowered = char.lower()
    return lowered[0] if lowered else char


def fold_case(char: str) -> str:
    """Lower-case a character, with a fast path for ASCII capitals."""
    if "A" <= char <= "Z":
        return chr(ord(char) + 32)
    if ord(char) > _MAX_ASCII:
        return to_lower(char)
    return char


def _try_skip(text: str, case_sensitive: bool, char: str, start: int) -> int:
    rest = text[start:]
    idx = rest.find(char)
    if idx == 0:
        return start
    if not case_sensitive and "a" <= char <= "z":
        if idx > 0:
            rest = rest[:idx]
        upper_idx = rest.find(char.upper())
        if upper_idx >= 0:
            idx = upper_idx
    if idx < 0:
        return -1
    return start + idx


def ascii_fuzzy_index(text: str, pattern: str, case_sensitive: bool) -> int:
    """Quick scan for ASCII text.

    Returns -1 when the pattern cannot match. Otherwise it returns an index
    from which matching may start; this is 0 when the text is not ASCII.
    """
    if not text.isascii():
        return 0
    if not pattern.isascii():
        return -1

    first_idx, idx = 0, 0
    for pidx, pchar in enumerate(pattern):
        idx = _try_skip(text, case_sensitive, pchar, idx)
        if idx < 0:
            return -1
        if pidx == 0 and idx > 0:
            # Step back one so the bonus of the first match can be computed.
            first_idx = idx - 1
        idx += 1
    return first_idx


def _index_at(index: int, size: int, forward: bool) -> int:
    return index if forward else size - index - 1


def calculate_score(
    case_sensitive: bool,
    normalize: bool,
    text: str,
    pattern: str,
    sidx: int,
    eidx: int,
    with_pos: bool,
) -> tuple[int, tuple[int, ...] | None]:
    """Score the greedy alignment of ``pattern`` within ``text[sidx:eidx]``.

    Uses the same criteria as :func:`fuzzy_match_v2` and returns the score
    with the matched positions, or ``None`` for them if not requested.
    """
    pidx = 0
    score = 0
    in_gap = False
    consecutive = 0
    first_bonus = 0
    positions: list[int] | None = [] if with_pos else None
    prev_class = char_class_of(text[sidx - 1]) if sidx > 0 else CharClass.NON_WORD

    for idx in range(sidx, eidx):
        char = text[idx]
        char_class = char_class_of(char)
        if not case_sensitive:
            char = fold_case(char)
        if normalize:
            char = normalize_rune(char)
        if char == pattern[pidx]:
            if positions is not None:
                positions.append(idx)
            score += SCORE_MATCH
            bonus = bonus_for(prev_class, char_class)
            if consecutive == 0:
                first_bonus = bonus
            else:
                if bonus == BONUS_BOUNDARY:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            score += bonus * BONUS_FIRST_CHAR_MULTIPLIER if pidx == 0 else bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = char_class

    return score, None if positions is None else tuple(positions)


def fuzzy_match_v1(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
) -> MatchResult:
    """Greedy fuzzy match: first occurrence, then shortened backwards."""
    if not pattern:
        return MatchResult(0, 0, 0)
    if ascii_fuzzy_index(text, pattern, case_sensitive) < 0:
        return NO_MATCH

    len_text = len(text)
    len_pattern = len(pattern)
    pidx = 0
    sidx = -1
    eidx = -1

    for index in range(len_text):
        char = text[_index_at(index, len_text, forward)]
        if not case_sensitive:
            char = fold_case(char)
        if normalize:
            char = normalize_rune(char)
        if char == pattern[_index_at(pidx, len_pattern, forward)]:
            if sidx < 0:
                sidx = index
            pidx += 1
            if pidx == len_pattern:
                eidx = index + 1
                break

    if sidx < 0 or eidx < 0:
        return NO_MATCH

    pidx -= 1
    for index in range(eidx - 1, sidx - 1, -1):
        char = text[_index_at(index, len_text, forward)]
        if not case_sensitive:
            char = fold_case(char)
        if char == pattern[_index_at(pidx, len_pattern, forward)]:
            pidx -= 1
            if pidx < 0:
                sidx = index
                break

    if not forward:
        sidx, eidx = len_text - eidx, len_text - sidx

    score, positions = calculate_score(
        case_sensitive, normalize, text, pattern, sidx, eidx, with_pos
    )
    return MatchResult(sidx, eidx, score, positions)


def fuzzy_match_v2(
    case_sensitive: bool,
    normalize: bool,
    forward: bool,
    text: str,
    pattern: str,
    with_pos: bool = False,
    max_cells: int | None = None,
) -> MatchResult:
    """Optimal fuzzy match that maximises the score.

    If ``max_cells`` is given and the score matrix would exceed it, the
    greedy :func:`fuzzy_match_v1` is used instead. Matched positions, when
    requested, are listed from last to first.
    """
    m = len(pattern)
    if m == 0:
        return MatchResult(0, 0, 0, () if with_pos else None)
    n = len(text)

    if max_cells is not None and n * m > max_cells:
        return fuzzy_match_v1(case_sensitive, normalize, forward, text, pattern, with_pos)

    # Phase 1: quick rejection and starting point for ASCII text.
    idx = ascii_fuzzy_index(text, pattern, case_sensitive)
    if idx < 0:
        return NO_MATCH

    h0 = [0] * n
    c0 = [0] * n
    bonuses = [0] * n
    first = [0] * m
    chars = list(text)

    # Phase 2: bonus for each position, first occurrences, first-row scores.
    max_score, max_score_pos = 0, 0
    pidx, last_idx = 0, 0
    pchar0 = pchar = pattern[0]
    prev_h0 = 0
    prev_class = CharClass.NON_WORD
    in_gap = False
    for col in range(idx, n):
        char = chars[col]
        if ord(char) <= _MAX_ASCII:
            char_class = _ascii_class(char)
            if not case_sensitive and char_class == CharClass.UPPER:
                char = chr(ord(char) + 32)
        else:
            char_class = _non_ascii_class(char)
            if not case_sensitive and char_class == CharClass.UPPER:
                char = to_lower(char)
            if normalize:
                char = normalize_rune(char)

        chars[col] = char
        bonus = bonus_for(prev_class, char_class)
        bonuses[col] = bonus
        prev_class = char_class

        if char == pchar:
            if pidx < m:
                first[pidx] = col
                pidx += 1
                pchar = pattern[min(pidx, m - 1)]
            last_idx = col

        if char == pchar0:
            score = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
            h0[col] = score
            c0[col] = 1
            if m == 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, col
                if forward and bonus == BONUS_BOUNDARY:
                    break
            in_gap = False
        else:
            gap = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            h0[col] = max(prev_h0 + gap, 0)
            c0[col] = 0
            in_gap = True
        prev_h0 = h0[col]

    if pidx != m:
        return NO_MATCH
    if m == 1:
        return MatchResult(
            max_score_pos,
            max_score_pos + 1,
            max_score,
            (max_score_pos,) if with_pos else None,
        )

    # Phase 3: fill in the score matrix (H) and consecutive-run matrix (C).
    f0 = first[0]
    width = last_idx - f0 + 1
    scores = [0] * (width * m)
    scores[:width] = h0[f0 : last_idx + 1]
    runs = [0] * (width * m)
    runs[:width] = c0[f0 : last_idx + 1]

    for pidx in range(1, m):
        f = first[pidx]
        pchar = pattern[pidx]
        row = pidx * width
        in_gap = False
        scores[row + f - f0 - 1] = 0
        for col in range(f, last_idx + 1):
            j0 = col - f0
            diag = row - width + j0 - 1
            s1 = 0
            consecutive = 0
            gap = SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            s2 = scores[row + j0 - 1] + gap

            if pchar == chars[col]:
                s1 = scores[diag] + SCORE_MATCH
                bonus = bonuses[col]
                consecutive = runs[diag] + 1
                if bonus == BONUS_BOUNDARY:
                    # A word boundary starts a new consecutive run.
                    consecutive = 1
                elif consecutive > 1:
                    bonus = max(
                        bonus, BONUS_CONSECUTIVE, bonuses[col - consecutive + 1]
                    )
                if s1 + bonus < s2:
                    s1 += bonuses[col]
                    consecutive = 0
                else:
                    s1 += bonus
            runs[row + j0] = consecutive

            in_gap = s1 < s2
            score = max(s1, s2, 0)
            if pidx == m - 1 and (
                (forward and score > max_score) or (not forward and score >= max_score)
            ):
                max_score, max_score_pos = score, col
            scores[row + j0] = score

    # Phase 4: optional backtrace to recover the matched positions.
    positions: list[int] | None = None
    j = f0
    if with_pos:
        positions = []
        i = m - 1
        j = max_score_pos
        prefer_match = True
        while True:
            base = i * width
            j0 = j - f0
            s = scores[base + j0]
            s1 = s2 = 0
            if i > 0 and j >= first[i]:
                s1 = scores[base - width + j0 - 1]
            if j > first[i]:
                s2 = scores[base + j0 - 1]

            if s > s1 and (s > s2 or (s == s2 and prefer_match)):
                positions.append(j)
                if i == 0:
                    break
                i -= 1
            below = base + width + j0 + 1
            prefer_match = runs[base + j0] > 1 or (below < len(runs) and runs[below] > 0)
            j -= 1

    # The start offset is only exact when positions were traced.
    return MatchResult(
        j,
        max_score_pos + 1,
        max_score,
        None if positions is None else tuple(positions),
    )