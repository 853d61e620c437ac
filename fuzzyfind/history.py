"""Query history stored in a plain text file, one entry per line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

_MODE = 0o600


def _write(path: Path, content: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _MODE)
    with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as fh:
        fh.write(content)


def _error(path: Path, exc: OSError) -> Exception:
    if isinstance(exc, PermissionError):
        return PermissionError(f"permission denied: {path}")
    return ValueError(f"invalid history file: {exc}")


class History:
    """Input history with a cursor for browsing older and newer entries.

    The last line is always the entry being edited. Edits made to older
    entries while browsing are kept in memory only.
    """

    def __init__(self, path: Union[str, os.PathLike], max_size: int) -> None:
        self.path = Path(path)
        self.max_size = max_size
        try:
            data = self.path.read_text(encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            data = ""
            try:
                _write(self.path, data)
            except OSError as exc:
                raise _error(self.path, exc) from exc
        except OSError as exc:
            raise _error(self.path, exc) from exc

        lines = data.strip("\n").split("\n")
        if lines[-1]:
            lines.append("")
        self.lines: list[str] = lines
        self.modified: dict[int, str] = {}
        self.cursor = len(lines) - 1

    def append(self, line: str) -> None:
        """Record ``line`` and write the history file. Empty lines are ignored."""
        if not line:
            return
        lines = self.lines[:-1] + [line]
        if len(lines) > self.max_size:
            lines = lines[len(lines) - self.max_size :]
        self.lines = lines + [""]
        _write(self.path, "\n".join(self.lines))

    def override(self, text: str) -> None:
        """Replace the entry under the cursor in memory."""
        last = len(self.lines) - 1
        if self.cursor == last:
            self.lines[self.cursor] = text
        elif self.cursor < last:
            self.modified[self.cursor] = text

    def current(self) -> str:
        return self.modified.get(self.cursor, self.lines[self.cursor])

    def previous(self) -> str:
        """Move to the older entry, if any, and return it."""
        if self.cursor > 0:
            self.cursor -= 1
        return self.current()

    def next(self) -> str:
        """Move to the newer entry, if any, and return it."""
        if self.cursor < len(self.lines) - 1:
            self.cursor += 1
        return self.current()