import pytest

from fuzzyfind.fuzzy import (
    CharClass,
    MatchResult,
    bonus_at,
    bonus_for,
    calculate_score,
    char_class_of,
    fuzzy_match_v1,
    fuzzy_match_v2,
)


def _prep(case_sensitive, pattern):
    return pattern if case_sensitive else pattern.lower()


def _summary(result):
    if result.positions:
        positions = sorted(result.positions)
        return positions[0], positions[-1] + 1, result.score
    return result.start, result.end, result.score


FUZZY_CASES = [
    (False, "fooBarbaz1", "oBZ", 2, 9, 49),
    (False, "foo bar baz", "fbb", 0, 9, 70),
    (False, "/AutomatorDocument.icns", "rdoc", 9, 13, 79),
    (False, "/man1/zshcompctl.1", "zshc", 6, 10, 104),
    (False, "/.oh-my-zsh/cache", "zshc", 8, 13, 101),
    (False, "ab0123 456", "12356", 3, 10, 88),
    (False, "abc123 456", "12356", 3, 10, 108),
    (False, "foo/bar/baz", "fbb", 0, 9, 70),
    (False, "fooBarBaz", "fbb", 0, 7, 70),
    (False, "foo barbaz", "fbb", 0, 8, 63),
    (False, "fooBar Baz", "foob", 0, 4, 104),
    (False, "xFoo-Bar Baz", "foo-b", 1, 6, 124),
    (True, "fooBarbaz", "oBz", 2, 9, 49),
    (True, "Foo/Bar/Baz", "FBB", 0, 9, 70),
    (True, "FooBarBaz", "FBB", 0, 7, 70),
    (True, "FooBar Baz", "FooB", 0, 4, 104),
    (True, "foo-bar", "o-ba", 2, 6, 88),
    (True, "fooBarbaz", "oBZ", -1, -1, 0),
    (True, "Foo Bar Baz", "fbb", -1, -1, 0),
    (True, "fooBarbaz", "fooBarbazz", -1, -1, 0),
]

NORMALIZE_CASES = [
    ("Só Danço Samba", "So", 0, 2, 56),
    ("Só Danço Samba", "sodc", 0, 7, 89),
    ("Danço", "danco", 0, 5, 128),
]


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive,text,pattern,sidx,eidx,score", FUZZY_CASES)
def test_fuzzy_match_v1(forward, case_sensitive, text, pattern, sidx, eidx, score):
    result = fuzzy_match_v1(case_sensitive, False, forward, text, _prep(case_sensitive, pattern), True)
    assert _summary(result) == (sidx, eidx, score)


@pytest.mark.parametrize("forward", [True, False])
@pytest.mark.parametrize("case_sensitive,text,pattern,sidx,eidx,score", FUZZY_CASES)
def test_fuzzy_match_v2(forward, case_sensitive, text, pattern, sidx, eidx, score):
    result = fuzzy_match_v2(case_sensitive, False, forward, text, _prep(case_sensitive, pattern), True)
    assert _summary(result) == (sidx, eidx, score)


def test_fuzzy_match_v1_backward():
    assert _summary(fuzzy_match_v1(False, False, True, "foobar fb", "fb", True)) == (0, 4, 44)
    assert _summary(fuzzy_match_v1(False, False, False, "foobar fb", "fb", True)) == (7, 9, 56)


@pytest.mark.parametrize("forward", [True, False])
def test_empty_pattern(forward):
    assert _summary(fuzzy_match_v1(True, False, forward, "foobar", "", True)) == (0, 0, 0)
    assert _summary(fuzzy_match_v2(True, False, forward, "foobar", "", True)) == (0, 0, 0)


@pytest.mark.parametrize("text,pattern,sidx,eidx,score", NORMALIZE_CASES)
def test_normalize_v1(text, pattern, sidx, eidx, score):
    result = fuzzy_match_v1(False, True, True, text, pattern.lower(), True)
    assert _summary(result) == (sidx, eidx, score)


@pytest.mark.parametrize("text,pattern,sidx,eidx,score", NORMALIZE_CASES)
def test_normalize_v2(text, pattern, sidx, eidx, score):
    result = fuzzy_match_v2(False, True, True, text, pattern.lower(), True)
    assert _summary(result) == (sidx, eidx, score)


def test_long_string():
    size = 65535
    text = "x" * size + "z" + "x" * (size - 1)
    result = fuzzy_match_v2(True, False, True, text, "zx", True)
    assert _summary(result) == (size, size + 2, 36)


def test_no_match_result_is_empty():
    result = fuzzy_match_v2(True, False, True, "fooBarbaz", "oBZ", True)
    assert result == MatchResult(-1, -1, 0, None)
    assert not result.matched


def test_v2_finds_better_occurrence_than_v1():
    text = "a_____b__c__abc"
    v1 = fuzzy_match_v1(False, False, True, text, "abc", True)
    v2 = fuzzy_match_v2(False, False, True, text, "abc", True)
    assert v1.start == 0
    assert v2.start == 12
    assert v2.end == 15
    assert v2.score == 80
    assert sorted(v2.positions) == [12, 13, 14]
    assert v2.score > v1.score


def test_v2_falls_back_when_matrix_too_large():
    text = "a_____b__c__abc"
    limited = fuzzy_match_v2(False, False, True, text, "abc", True, 1)
    assert limited == fuzzy_match_v1(False, False, True, text, "abc", True)


def test_v2_single_char_positions():
    result = fuzzy_match_v2(False, False, True, "foo bar", "b", True)
    assert result == MatchResult(4, 5, 32, (4,))


def test_v1_without_positions():
    result = fuzzy_match_v1(False, False, True, "foo bar baz", "fbb", False)
    assert result == MatchResult(0, 9, 70, None)


def test_calculate_score_positions():
    score, positions = calculate_score(False, False, "foo bar baz", "fbb", 0, 9, True)
    assert score == 70
    assert positions == (0, 4, 8)


@pytest.mark.parametrize(
    "char,expected",
    [
        ("a", CharClass.LOWER),
        ("Z", CharClass.UPPER),
        ("5", CharClass.NUMBER),
        ("/", CharClass.NON_WORD),
        (" ", CharClass.NON_WORD),
        ("é", CharClass.LOWER),
        ("Ü", CharClass.UPPER),
        ("漢", CharClass.LETTER),
        ("٣", CharClass.NUMBER),
    ],
)
def test_char_class_of(char, expected):
    assert char_class_of(char) == expected


def test_bonus_for():
    assert bonus_for(CharClass.NON_WORD, CharClass.LOWER) == 8
    assert bonus_for(CharClass.LOWER, CharClass.UPPER) == 7
    assert bonus_for(CharClass.LOWER, CharClass.NUMBER) == 7
    assert bonus_for(CharClass.NUMBER, CharClass.NUMBER) == 0
    assert bonus_for(CharClass.LOWER, CharClass.NON_WORD) == 8
    assert bonus_for(CharClass.LOWER, CharClass.LOWER) == 0


def test_bonus_at():
    assert bonus_at("fooBar", 0) == 8
    assert bonus_at("fooBar", 3) == 7
    assert bonus_at("foo bar", 4) == 8
    assert bonus_at("foo bar", 3) == 8
    assert bonus_at("foo bar", 1) == 0