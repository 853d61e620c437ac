# fuzzyfind

The building blocks of an interactive fuzzy finder, as a plain Python library
with no dependencies outside the standard library.

| Module | What it provides |
| --- | --- |
| `fuzzyfind.fuzzy` | `fuzzy_match_v1` (greedy) and `fuzzy_match_v2` (best-scoring alignment), `MatchResult`, `CharClass`, `char_class_of`, `bonus_for`, `bonus_at`, `calculate_score` |
| `fuzzyfind.exact` | `exact_match_naive`, `prefix_match`, `suffix_match`, `equal_match` |
| `fuzzyfind.normalize` | `normalize_rune`, `normalize_runes`: accented Latin letters to their base letter |
| `fuzzyfind.ansi` | `extract_color`, `interpret_code`, `next_ansi_escape_sequence`, `parse_ansi_code`, `to_ansi_string`, `AnsiState`, `AnsiOffset`, `Attr` |
| `fuzzyfind.item` | `Item`: one input line |
| `fuzzyfind.chunklist` | `Chunk`, `ChunkList`, `count_items`: thread-safe storage in chunks of 100 items |
| `fuzzyfind.cache` | `ChunkCache`: per-chunk cache of results keyed by query |
| `fuzzyfind.merger` | `Merger`, `pass_merger`, `empty_merger`: one ordered view over several result lists |
| `fuzzyfind.history` | `History`: query history kept in a file |
| `fuzzyfind.constants` | tuning constants, exit codes, `EventType`, `default_command` |

## Installation

```
pip install .
```

## Matching

Every matcher takes `case_sensitive`, `normalize`, `forward`, `text`,
`pattern` and `with_pos`, and returns a `MatchResult` with `start`, `end`,
`score` and `positions`. The pattern must already be in lower case when the
search is not case sensitive, and already normalized when `normalize` is on.

```python
from fuzzyfind.fuzzy import fuzzy_match_v2

result = fuzzy_match_v2(False, False, True, "/AutomatorDocument.icns", "rdoc", with_pos=True)
print(result.start, result.end, result.score)  # 9 13 79
print(sorted(result.positions))                # [9, 10, 11, 12]
```

Scores reward matches at word boundaries, on camelCase humps and after
letter-to-digit changes, reward runs of consecutive matched characters, and
charge a penalty for gaps. `forward=False` prefers the last occurrence when
scores tie.

When there is no match, `start` and `end` are -1 and `result.matched` is false.
`fuzzy_match_v2` lists positions from last to first; with `with_pos=False`
they are `None`. Its `max_cells` argument caps the size of the score matrix:
when `len(text) * len(pattern)` exceeds it, the greedy `fuzzy_match_v1` is used
instead. The default, `None`, sets no cap.

The exact matchers never return positions:

- `exact_match_naive` finds the occurrence whose first character earns the most bonus.
- `prefix_match` and `suffix_match` ignore leading or trailing white space in
  the text, unless the pattern itself starts or ends with white space.
- `equal_match` matches when the stripped text equals the pattern.

```python
from fuzzyfind.exact import suffix_match
from fuzzyfind.normalize import normalize_runes

suffix_match(False, False, True, "fooBarbaz ", "baz")  # start=6, end=9
normalize_runes("Danço")                               # "Danco"
```

## ANSI colors

```python
from fuzzyfind.ansi import Attr, extract_color

text, offsets, state = extract_color("hello \x1b[34;45;1mworld", None)
# text == "hello world"
# offsets[0].start == 6, offsets[0].end == 11
# offsets[0].color.fg == 4, .bg == 5, .attr == Attr.BOLD
```

`offsets` is `None` when the text carries no color. To carry colors from one
line to the next, pass the returned `state` back in with the next line.
`AnsiState.to_ansi()` renders a state as a single escape sequence.

## Items, chunks and caching

```python
from fuzzyfind.chunklist import ChunkList
from fuzzyfind.item import Item

items = ChunkList(lambda line: Item(line))
items.push("hello")
items.push("world")
chunks, count = items.snapshot()  # count == 2
```

The builder returns an `Item`, or `None` to skip the input. A snapshot does
not change when more items are pushed later.

`ChunkCache` stores results only for full chunks, for non-empty queries, and
only when there are at most 20 results. `lookup` returns results for the exact
query. `search` returns the results of the longest proper prefix or suffix of
the query that is in the cache.

`Item.as_string(strip_ansi)` returns `orig_text` when it is set, with escape
sequences removed if asked, and otherwise returns `text`.

## Merging results

```python
from fuzzyfind.merger import Merger

merged = Merger([[1, 4, 7], [2, 3, 9]], sort=True)
list(merged)  # [1, 2, 3, 4, 7, 9]
```

With `sort=True` the lists must each be ordered by `key` (the values themselves
by default). They are merged lazily, and when two keys are equal the earlier
list comes first. Without sorting, the lists are concatenated, and reversed
when `tac=True`. `pass_merger(chunks, tac)` presents the items of a snapshot
in input order, and `empty_merger()` has no results. `cacheable()` is true
below 100000 results.

## History

```python
from fuzzyfind.history import History

History("queries.txt", 1000).append("foo")
history = History("queries.txt", 1000)
history.previous()  # "foo"
```

A missing file is created with mode 0600. An unreadable path raises
`PermissionError`, and any other read failure raises `ValueError`. Empty lines
are not recorded, and only the last `max_size` entries are kept. Edits made
with `override` to older entries stay in memory.

## What this package does not do

It has no command-line program and no interactive screen. It does not read
input streams or run the listing command that `default_command()` returns. It
does not parse query syntax into search terms. It does not run a background
matching loop. `EventType` and the timing constants name those parts, but
nothing in the package acts on them.