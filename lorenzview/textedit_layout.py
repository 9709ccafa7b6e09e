"""Text layout queries used by the text editing state machine."""

from __future__ import annotations

from dataclasses import dataclass

NEWLINE = "\n"
# Width reported for a newline so that cursor scans stop at the end of a line.
NEWLINE_WIDTH = -1.0


@dataclass
class TextRow:
    """Shape of one laid-out row of characters."""

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Location of a character and of the row holding it."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class MonospaceText:
    """An editable string laid out with fixed-width characters."""

    def __init__(
        self,
        text: str = "",
        char_width: float = 1.0,
        line_height: float = 1.0,
        wrap_width: float | None = None,
    ) -> None:
        if char_width <= 0 or line_height <= 0:
            raise ValueError("char_width and line_height must be positive")
        if wrap_width is not None and wrap_width <= 0:
            raise ValueError("wrap_width must be positive")
        self._chars = list(text)
        self._char_width = float(char_width)
        self.line_height = float(line_height)
        self.wrap_width = wrap_width

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return "".join(self._chars)

    def char_at(self, index: int) -> str:
        """Return the character at ``index``."""
        if not 0 <= index < len(self._chars):
            raise IndexError(index)
        return self._chars[index]

    def _row_limit(self) -> int | None:
        if self.wrap_width is None:
            return None
        return max(1, int(self.wrap_width // self._char_width))

    def layout_row(self, start: int) -> TextRow:
        """Lay out the row that begins at character ``start``."""
        limit = self._row_limit()
        visible = 0
        count = 0
        for ch in self._chars[start:]:
            if ch == NEWLINE:
                count += 1
                break
            if limit is not None and visible >= limit:
                break
            visible += 1
            count += 1
        return TextRow(
            x0=0.0,
            x1=visible * self._char_width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=count,
        )

    def char_width(self, line_start: int, index: int) -> float:
        """Width of character ``index`` of the row starting at ``line_start``."""
        if self.char_at(line_start + index) == NEWLINE:
            return NEWLINE_WIDTH
        return self._char_width

    def delete(self, pos: int, count: int) -> None:
        """Remove ``count`` characters starting at ``pos``."""
        if pos < 0 or count < 0 or pos + count > len(self._chars):
            raise IndexError("deletion out of range")
        del self._chars[pos : pos + count]

    def insert(self, pos: int, chars: str) -> bool:
        """Insert ``chars`` at ``pos``; return True once inserted."""
        if not 0 <= pos <= len(self._chars):
            raise IndexError("insertion out of range")
        self._chars[pos:pos] = list(chars)
        return True


def locate_coord(text: MonospaceText, x: float, y: float) -> int:
    """Return the character position nearest to the display point (x, y)."""
    n = len(text)
    base_y = 0.0
    i = 0
    row = TextRow()

    while i < n:
        row = text.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        for k in range(row.num_chars):
            w = text.char_width(i, k)
            if x < prev_x + w:
                return i + k if x < prev_x + w / 2 else i + k + 1
            prev_x += w

    last = i + row.num_chars - 1
    if text.char_at(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(text: MonospaceText, n: int, single_line: bool) -> FindState:
    """Find the display position of character ``n`` and of its row."""
    z = len(text)

    if n == z and single_line:
        row = text.layout_row(0)
        return FindState(
            x=row.x1, y=0.0, height=row.ymax - row.ymin, first_char=0, length=z
        )

    y = 0.0
    i = 0
    prev_start = 0
    while True:
        row = text.layout_row(i)
        length = row.num_chars
        if n < i + length:
            break
        if i + length == z and z > 0 and text.char_at(z - 1) != NEWLINE:
            break
        prev_start = i
        i += length
        y += row.baseline_y_delta
        if i == z:
            length = 0
            break

    first = i
    x = row.x0 + sum(text.char_width(first, k) for k in range(n - first))
    return FindState(
        x=x,
        y=y,
        height=row.ymax - row.ymin,
        first_char=first,
        length=length,
        prev_first=prev_start,
    )