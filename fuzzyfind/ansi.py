"""Parsing of ANSI escape sequences and extraction of colour spans from text."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional

_CTRL_SEQ_START = frozenset("\\[()")
_SPECIAL = frozenset("\x0e\x0f\x1b\x08")
_DIGITS = frozenset("0123456789")
_CTRL_PARAMS = frozenset("0123456789;?")


class Attr(IntFlag):
    """Text attributes that an SGR sequence can switch on."""

    BOLD = 1
    DIM = 2
    ITALIC = 4
    UNDERLINE = 8
    BLINK = 16
    REVERSE = 32


_ATTR_CODES = (
    (Attr.BOLD, "1;"),
    (Attr.DIM, "2;"),
    (Attr.ITALIC, "3;"),
    (Attr.UNDERLINE, "4;"),
    (Attr.BLINK, "5;"),
    (Attr.REVERSE, "7;"),
)


@dataclass(frozen=True)
class AnsiState:
    """Colours and attributes in effect. A colour of -1 means the default."""

    fg: int = -1
    bg: int = -1
    attr: Attr = Attr(0)
    lbg: int = -1

    def colored(self) -> bool:
        return self.fg != -1 or self.bg != -1 or int(self.attr) > 0 or self.lbg >= 0

    def same_as(self, other: Optional[AnsiState]) -> bool:
        """Compare with another state; ``None`` stands for an uncoloured one."""
        if other is None:
            return not self.colored()
        return (self.fg, self.bg, int(self.attr), self.lbg) == (
            other.fg,
            other.bg,
            int(other.attr),
            other.lbg,
        )

    def to_ansi(self) -> str:
        """Render the state as a single SGR escape sequence."""
        if not self.colored():
            return ""
        codes = "".join(code for flag, code in _ATTR_CODES if self.attr & flag)
        codes += to_ansi_string(self.fg, 30) + to_ansi_string(self.bg, 40)
        return "\x1b[" + codes.removesuffix(";") + "m"


@dataclass
class AnsiOffset:
    """A span of characters, ``start`` inclusive and ``end`` exclusive, in one colour."""

    start: int
    end: int
    color: AnsiState = field(default_factory=AnsiState)


def to_ansi_string(color: int, offset: int) -> str:
    """SGR parameters, with a trailing ';', selecting ``color``.

    ``offset`` is 30 for the foreground and 40 for the background.
    """
    if color == -1:
        ret = str(offset + 9)
    elif color < 8:
        ret = str(offset + color)
    elif color < 16:
        ret = str(offset - 30 + 90 + color - 8)
    elif color < 256:
        ret = f"{offset + 8};5;{color}"
    elif color >= 1 << 24:
        r = (color >> 16) & 0xFF
        g = (color >> 8) & 0xFF
        b = color & 0xFF
        ret = f"{offset + 8};2;{r};{g};{b}"
    else:
        ret = ""
    return ret + ";"


def _is_print(char: str) -> bool:
    return " " <= char <= "~"


def _match_operating_system_command(s: str, start: int) -> int:
    i = start + 5
    n = len(s)
    while i < n and _is_print(s[i]):
        i += 1
    if i < n:
        if s[i] == "\x07":
            return i + 1
        if s[i] == "\x1b" and i < n - 1 and s[i + 1] == "\\":
            return i + 2
    return -1


def _match_control_sequence(s: str, start: int) -> int:
    i = start + 2
    n = len(s)
    while i < n and s[i] in _CTRL_PARAMS:
        i += 1
    if i < n:
        c = s[i]
        if "a" <= c <= "z" or "A" <= c <= "Z" or c == "@":
            return i + 1
    return -1


def _next_escape(s: str, pos: int) -> tuple[int, int]:
    n = len(s)
    i = pos
    while i < n and s[i] not in _SPECIAL:
        i += 1

    while i < n:
        c = s[i]
        if c == "\x08":
            if i > pos and s[i - 1] != "\n":
                return i - 1, i + 1
        elif c == "\x1b":
            if i + 2 < n and s[i + 1] in _CTRL_SEQ_START:
                end = _match_control_sequence(s, i)
                if end != -1:
                    return i, end
            if (
                i + 5 < n
                and s[i + 1] == "]"
                and s[i + 2] in _DIGITS
                and s[i + 3] == ";"
                and _is_print(s[i + 4])
            ):
                end = _match_operating_system_command(s, i)
                if end != -1:
                    return i, end
            if i + 1 < n and s[i + 1] != "\n":
                return i, i + 2
        elif c in "\x0e\x0f":
            return i, i + 1
        i += 1
    return -1, -1


def next_ansi_escape_sequence(s: str) -> tuple[int, int]:
    """Return the character span of the first escape sequence in ``s``.

    Returns ``(-1, -1)`` when there is none.
    """
    return _next_escape(s, 0)


def parse_ansi_code(s: str) -> tuple[int, str]:
    """Parse the leading non-negative number of a ';'-separated list.

    Returns the number, or -1 if it is missing or malformed, and the rest
    of the list after the first ';'.
    """
    head, sep, remaining = s.partition(";")
    if not sep:
        remaining = ""
    if not head or any(ch not in _DIGITS for ch in head):
        return -1, remaining
    return int(head), remaining


def interpret_code(code: str, prev_state: Optional[AnsiState]) -> AnsiState:
    """Apply one escape sequence to the previous state and return the new one."""
    if prev_state is None:
        fg, bg, attr, lbg = -1, -1, Attr(0), -1
    else:
        fg, bg, attr, lbg = prev_state.fg, prev_state.bg, prev_state.attr, prev_state.lbg

    if not code.startswith("\x1b[") or not code.endswith("m"):
        if prev_state is not None and code.endswith("0K"):
            lbg = prev_state.bg
        return AnsiState(fg, bg, attr, lbg)

    if len(code) <= 3:
        return AnsiState(-1, -1, Attr(0), lbg)

    body = code[2:-1]
    colors = {"fg": fg, "bg": bg}
    target = "fg"
    state256 = 0

    while body:
        num, body = parse_ansi_code(body)
        if num == -1:
            continue
        if state256 == 0:
            if num == 38:
                target = "fg"
                state256 += 1
            elif num == 48:
                target = "bg"
                state256 += 1
            elif num == 39:
                colors["fg"] = -1
            elif num == 49:
                colors["bg"] = -1
            elif num == 1:
                attr |= Attr.BOLD
            elif num == 2:
                attr |= Attr.DIM
            elif num == 3:
                attr |= Attr.ITALIC
            elif num == 4:
                attr |= Attr.UNDERLINE
            elif num == 5:
                attr |= Attr.BLINK
            elif num == 7:
                attr |= Attr.REVERSE
            elif num == 23:
                attr = Attr(int(attr) & ~int(Attr.ITALIC))
            elif num == 24:
                attr = Attr(int(attr) & ~int(Attr.UNDERLINE))
            elif num == 0:
                colors["fg"] = -1
                colors["bg"] = -1
                attr = Attr(0)
            elif 30 <= num <= 37:
                colors["fg"] = num - 30
            elif 40 <= num <= 47:
                colors["bg"] = num - 40
            elif 90 <= num <= 97:
                colors["fg"] = num - 90 + 8
            elif 100 <= num <= 107:
                colors["bg"] = num - 100 + 8
        elif state256 == 1:
            if num == 2:
                state256 = 10
            elif num == 5:
                state256 += 1
            else:
                state256 = 0
        elif state256 == 2:
            colors[target] = num
            state256 = 0
        elif state256 == 10:
            colors[target] = (1 << 24) | (num << 16)
            state256 += 1
        elif state256 == 11:
            colors[target] |= num << 8
            state256 += 1
        elif state256 == 12:
            colors[target] |= num
            state256 = 0

    if state256 > 0:
        colors[target] = -1
    return AnsiState(colors["fg"], colors["bg"], attr, lbg)


ProcFn = Callable[[str, Optional[AnsiState]], bool]


def extract_color(
    text: str,
    state: Optional[AnsiState],
    proc: Optional[ProcFn] = None,
) -> tuple[str, Optional[list[AnsiOffset]], Optional[AnsiState]]:
    """Strip escape sequences from ``text`` and collect the coloured spans.

    ``state`` is the colour in effect at the start of the text. ``proc``, if
    given, is called with each plain segment and the state in effect for it;
    returning false stops the scan and yields ``("", None, None)``.
    Returns the plain text, the spans (or ``None`` if there are none) and
    the state in effect at the end.
    """
    offsets: list[AnsiOffset] = []
    if state is not None:
        offsets.append(AnsiOffset(0, 0, state))

    pieces: list[str] = []
    prev_idx = 0
    char_count = 0
    idx = 0
    while idx < len(text):
        start, end = _next_escape(text, idx)
        if start == -1:
            break
        idx = end

        prev = text[prev_idx:start]
        if proc is not None and not proc(prev, state):
            return "", None, None
        prev_idx = idx

        if prev:
            char_count += len(prev)
            pieces.append(prev)

        new_state = interpret_code(text[start:idx], state)
        if not new_state.same_as(state):
            if state is not None:
                offsets[-1].end = char_count
            if new_state.colored():
                state = new_state
                offsets.append(AnsiOffset(char_count, char_count, new_state))
            else:
                state = None

    if prev_idx == 0:
        rest = text
        trimmed = text
    else:
        rest = text[prev_idx:]
        pieces.append(rest)
        trimmed = "".join(pieces)

    if proc is not None:
        proc(rest, state)

    if offsets:
        if rest and state is not None:
            char_count += len(rest)
            offsets[-1].end = char_count
        return trimmed, offsets, state
    return trimmed, None, state