import pytest

from fuzzyfind.exact import equal_match, exact_match_naive, prefix_match, suffix_match
from fuzzyfind.fuzzy import (
    BONUS_BOUNDARY,
    BONUS_CAMEL123,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    BONUS_NON_WORD,
    SCORE_MATCH,
)


def _summary(result):
    if result.positions:
        positions = sorted(result.positions)
        return positions[0], positions[-1] + 1, result.score
    return result.start, result.end, result.score


@pytest.mark.parametrize("forward", [True, False])
def test_exact_match_naive(forward):
    assert _summary(exact_match_naive(True, False, forward, "fooBarbaz", "oBA", True)) == (-1, -1, 0)
    assert _summary(
        exact_match_naive(True, False, forward, "fooBarbaz", "fooBarbazz", True)
    ) == (-1, -1, 0)
    assert _summary(exact_match_naive(False, False, forward, "fooBarbaz", "oba", True)) == (
        2, 5, SCORE_MATCH * 3 + BONUS_CAMEL123 + BONUS_CONSECUTIVE,
    )
    assert _summary(
        exact_match_naive(False, False, forward, "/AutomatorDocument.icns", "rdoc", True)
    ) == (9, 13, SCORE_MATCH * 4 + BONUS_CAMEL123 + BONUS_CONSECUTIVE * 2)
    assert _summary(
        exact_match_naive(False, False, forward, "/man1/zshcompctl.1", "zshc", True)
    ) == (6, 10, SCORE_MATCH * 4 + BONUS_BOUNDARY * (BONUS_FIRST_CHAR_MULTIPLIER + 3))
    assert _summary(
        exact_match_naive(False, False, forward, "/.oh-my-zsh/cache", "zsh/c", True)
    ) == (8, 13, SCORE_MATCH * 5 + BONUS_BOUNDARY * (BONUS_FIRST_CHAR_MULTIPLIER + 4))


def test_exact_match_naive_backward():
    assert _summary(exact_match_naive(False, False, True, "foobar foob", "oo", True)) == (
        1, 3, SCORE_MATCH * 2 + BONUS_CONSECUTIVE,
    )
    assert _summary(exact_match_naive(False, False, False, "foobar foob", "oo", True)) == (
        8, 10, SCORE_MATCH * 2 + BONUS_CONSECUTIVE,
    )


@pytest.mark.parametrize("forward", [True, False])
def test_prefix_match(forward):
    score = (SCORE_MATCH + BONUS_BOUNDARY) * 3 + BONUS_BOUNDARY * (BONUS_FIRST_CHAR_MULTIPLIER - 1)
    assert _summary(prefix_match(True, False, forward, "fooBarbaz", "Foo", True)) == (-1, -1, 0)
    assert _summary(prefix_match(False, False, forward, "fooBarBaz", "baz", True)) == (-1, -1, 0)
    assert _summary(prefix_match(False, False, forward, "fooBarbaz", "foo", True)) == (0, 3, score)
    assert _summary(prefix_match(False, False, forward, "foOBarBaZ", "foo", True)) == (0, 3, score)
    assert _summary(prefix_match(False, False, forward, "f-oBarbaz", "f-o", True)) == (0, 3, score)
    assert _summary(prefix_match(False, False, forward, " fooBar", "foo", True)) == (1, 4, score)
    assert _summary(prefix_match(False, False, forward, " fooBar", " fo", True)) == (0, 3, score)
    assert _summary(prefix_match(False, False, forward, "     fo", "foo", True)) == (-1, -1, 0)


@pytest.mark.parametrize("forward", [True, False])
def test_suffix_match(forward):
    assert _summary(suffix_match(True, False, forward, "fooBarbaz", "Baz", True)) == (-1, -1, 0)
    assert _summary(suffix_match(False, False, forward, "fooBarbaz", "foo", True)) == (-1, -1, 0)
    assert _summary(suffix_match(False, False, forward, "fooBarbaz", "baz", True)) == (
        6, 9, SCORE_MATCH * 3 + BONUS_CONSECUTIVE * 2,
    )
    assert _summary(suffix_match(False, False, forward, "fooBarBaZ", "baz", True)) == (
        6, 9,
        (SCORE_MATCH + BONUS_CAMEL123) * 3 + BONUS_CAMEL123 * (BONUS_FIRST_CHAR_MULTIPLIER - 1),
    )
    assert _summary(suffix_match(False, False, forward, "fooBarbaz ", "baz", True)) == (
        6, 9, SCORE_MATCH * 3 + BONUS_CONSECUTIVE * 2,
    )
    assert _summary(suffix_match(False, False, forward, "fooBarbaz ", "baz ", True)) == (
        6, 10, SCORE_MATCH * 4 + BONUS_CONSECUTIVE * 2 + BONUS_NON_WORD,
    )


@pytest.mark.parametrize("forward", [True, False])
def test_empty_pattern(forward):
    assert _summary(exact_match_naive(True, False, forward, "foobar", "", True)) == (0, 0, 0)
    assert _summary(prefix_match(True, False, forward, "foobar", "", True)) == (0, 0, 0)
    assert _summary(suffix_match(True, False, forward, "foobar", "", True)) == (6, 6, 0)


def test_equal_match_empty_pattern_never_matches():
    result = equal_match(True, False, True, "foobar", "", False)
    assert (result.start, result.end, result.score) == (-1, -1, 0)


def test_equal_match_strips_surrounding_whitespace():
    score = (SCORE_MATCH + BONUS_BOUNDARY) * 3 + (BONUS_FIRST_CHAR_MULTIPLIER - 1) * BONUS_BOUNDARY
    assert _summary(equal_match(False, False, True, "  FoO ", "foo", True)) == (2, 5, score)
    assert _summary(equal_match(True, False, True, "  FoO ", "foo", True)) == (-1, -1, 0)
    assert _summary(equal_match(False, False, True, "foobar", "foo", True)) == (-1, -1, 0)


def test_normalize_prefix_and_exact():
    assert _summary(prefix_match(False, True, True, "Só Danço Samba", "so", True)) == (0, 2, 56)
    assert _summary(exact_match_naive(False, True, True, "Só Danço Samba", "so", True)) == (0, 2, 56)
    assert _summary(prefix_match(False, True, True, "Danço", "danco", True)) == (0, 5, 128)
    assert _summary(exact_match_naive(False, True, True, "Danço", "danco", True)) == (0, 5, 128)


def test_normalize_suffix_and_equal():
    assert _summary(suffix_match(False, True, True, "Danço", "danco", True)) == (0, 5, 128)
    assert _summary(equal_match(False, True, True, "Danço", "danco", True)) == (0, 5, 128)