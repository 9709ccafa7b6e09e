"""Cursor, selection and undo handling for a multi-line or single-line text field."""

from __future__ import annotations

from enum import IntFlag

from .textedit_layout import NEWLINE, NEWLINE_WIDTH, MonospaceText, find_charpos, locate_coord
from .textedit_undo import UndoState

# Inputs below this value are character codes; editing keys live above it.
_CHAR_LIMIT = 0x200000


class Key(IntFlag):
    """Editing keys; combine with ``SHIFT`` to extend the selection."""

    LEFT = 1 << 21
    RIGHT = 1 << 22
    UP = 1 << 23
    DOWN = 1 << 24
    PGUP = 1 << 25
    PGDOWN = 1 << 26
    LINESTART = 1 << 27
    LINEEND = 1 << 28
    TEXTSTART = 1 << 29
    TEXTEND = 1 << 30
    DELETE = 1 << 31
    BACKSPACE = 1 << 32
    UNDO = 1 << 33
    REDO = 1 << 34
    INSERT = 1 << 35
    WORDLEFT = 1 << 36
    WORDRIGHT = 1 << 37
    SHIFT = 1 << 38


def _is_space(ch: str) -> bool:
    return ch.isspace()


def _is_word_boundary(text: MonospaceText, idx: int) -> bool:
    if idx <= 0:
        return True
    return _is_space(text.char_at(idx - 1)) and not _is_space(text.char_at(idx))


def _move_word_left(text: MonospaceText, c: int) -> int:
    c -= 1
    while c >= 0 and not _is_word_boundary(text, c):
        c -= 1
    return max(c, 0)


def _move_word_right(text: MonospaceText, c: int) -> int:
    length = len(text)
    c += 1
    while c < length and not _is_word_boundary(text, c):
        c += 1
    return min(c, length)


class TextEditState:
    """Cursor position, selection and undo history of one text field."""

    def __init__(self, single_line: bool = False) -> None:
        self.undostate = UndoState()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset cursor, selection, modes and history."""
        self.undostate.clear()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        """Return True if some characters are selected."""
        return self.select_start != self.select_end

    def clamp(self, text: MonospaceText) -> None:
        """Keep cursor and selection inside the text after it changed."""
        n = len(text)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    # -- mouse ---------------------------------------------------------------

    def _row_y(self, text: MonospaceText, y: float) -> float:
        if self.single_line:
            return text.layout_row(0).ymin
        return y

    def click(self, text: MonospaceText, x: float, y: float) -> None:
        """Move the cursor to the clicked point and drop the selection."""
        y = self._row_y(text, y)
        self.cursor = locate_coord(text, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, text: MonospaceText, x: float, y: float) -> None:
        """Move the cursor and the selection end to the dragged point."""
        y = self._row_y(text, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        self.cursor = self.select_end = locate_coord(text, x, y)

    # -- editing helpers -----------------------------------------------------

    def _delete(self, text: MonospaceText, where: int, length: int) -> None:
        self.undostate.make_undo_delete(text, where, length)
        text.delete(where, length)
        self.has_preferred_x = False

    def _delete_selection(self, text: MonospaceText) -> None:
        self.clamp(text)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(text, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(text, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, text: MonospaceText) -> None:
        if self.has_selection():
            self._sort_selection()
            self.clamp(text)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    # -- public editing ------------------------------------------------------

    def cut(self, text: MonospaceText) -> bool:
        """Delete the selection; return True if there was one."""
        if self.has_selection():
            self._delete_selection(text)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, text: MonospaceText, chars: str) -> bool:
        """Replace the selection, or insert at the cursor, with ``chars``."""
        self.clamp(text)
        self._delete_selection(text)
        if text.insert(self.cursor, chars):
            self.undostate.make_undo_insert(self.cursor, len(chars))
            self.cursor += len(chars)
            self.has_preferred_x = False
            return True
        return False

    def undo(self, text: MonospaceText) -> None:
        """Revert the latest edit."""
        cursor = self.undostate.undo(text)
        if cursor is not None:
            self.cursor = cursor
        self.has_preferred_x = False

    def redo(self, text: MonospaceText) -> None:
        """Reapply the latest undone edit."""
        cursor = self.undostate.redo(text)
        if cursor is not None:
            self.cursor = cursor
        self.has_preferred_x = False

    def _type_char(self, text: MonospaceText, ch: str) -> None:
        if ch == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(text):
            self.undostate.make_undo_replace(text, self.cursor, 1, 1)
            text.delete(self.cursor, 1)
            if text.insert(self.cursor, ch):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self._delete_selection(text)
            if text.insert(self.cursor, ch):
                self.undostate.make_undo_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    def _scan_row(self, text: MonospaceText, start: int, goal_x: float) -> None:
        self.cursor = start
        row = text.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            dx = text.char_width(start, i)
            if dx == NEWLINE_WIDTH:
                break
            x += dx
            if x > goal_x:
                break
            self.cursor += 1
        self.clamp(text)
        self.has_preferred_x = True
        self.preferred_x = goal_x

    def _move_down(self, text: MonospaceText, sel: bool, row_count: int) -> None:
        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(text)
        self.clamp(text)
        find = find_charpos(text, self.cursor, self.single_line)
        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            if text.char_at(find.first_char + find.length - 1) != NEWLINE:
                break
            self._scan_row(text, start, goal_x)
            if sel:
                self.select_end = self.cursor
            find.first_char += find.length
            find.length = text.layout_row(start).num_chars

    def _move_up(self, text: MonospaceText, sel: bool, row_count: int) -> None:
        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()
        self.clamp(text)
        find = find_charpos(text, self.cursor, self.single_line)
        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._scan_row(text, find.prev_first, goal_x)
            if sel:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and text.char_at(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan

    def _line_start(self, text: MonospaceText) -> None:
        if self.single_line:
            self.cursor = 0
        else:
            while self.cursor > 0 and text.char_at(self.cursor - 1) != NEWLINE:
                self.cursor -= 1

    def _line_end(self, text: MonospaceText) -> None:
        n = len(text)
        if self.single_line:
            self.cursor = n
        else:
            while self.cursor < n and text.char_at(self.cursor) != NEWLINE:
                self.cursor += 1

    def key(self, text: MonospaceText, key: Key | int | str) -> None:
        """Apply one keyboard input: a character, a code point or a ``Key``."""
        if isinstance(key, str):
            if len(key) != 1:
                raise ValueError("a key must be a single character")
            self._type_char(text, key)
            return

        code = int(key)
        while True:
            if 0 < code < _CHAR_LIMIT:
                self._type_char(text, chr(code))
                return
            shift = bool(code & Key.SHIFT)
            base = code & ~Key.SHIFT

            if base in (Key.DOWN, Key.PGDOWN, Key.UP, Key.PGUP):
                is_page = base in (Key.PGDOWN, Key.PGUP)
                if not is_page and self.single_line:
                    # Up and down act as left and right in a single-line field.
                    code = (Key.RIGHT if base == Key.DOWN else Key.LEFT) | (
                        Key.SHIFT if shift else 0
                    )
                    continue
                rows = self.row_count_per_page if is_page else 1
                if base in (Key.DOWN, Key.PGDOWN):
                    self._move_down(text, shift, rows)
                else:
                    self._move_up(text, shift, rows)
                return
            break

        if not shift:
            self._plain_key(text, base)
        else:
            self._shift_key(text, base)

    def _plain_key(self, text: MonospaceText, base: int) -> None:
        if base == Key.INSERT:
            self.insert_mode = not self.insert_mode
        elif base == Key.UNDO:
            self.undo(text)
        elif base == Key.REDO:
            self.redo(text)
        elif base == Key.LEFT:
            if self.has_selection():
                self._move_to_first()
            elif self.cursor > 0:
                self.cursor -= 1
            self.has_preferred_x = False
        elif base == Key.RIGHT:
            if self.has_selection():
                self._move_to_last(text)
            else:
                self.cursor += 1
            self.clamp(text)
            self.has_preferred_x = False
        elif base == Key.WORDLEFT:
            if self.has_selection():
                self._move_to_first()
            else:
                self.cursor = _move_word_left(text, self.cursor)
                self.clamp(text)
        elif base == Key.WORDRIGHT:
            if self.has_selection():
                self._move_to_last(text)
            else:
                self.cursor = _move_word_right(text, self.cursor)
                self.clamp(text)
        elif base in (Key.DELETE, Key.BACKSPACE):
            self._erase(text, base)
        elif base == Key.TEXTSTART:
            self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.TEXTEND:
            self.cursor = len(text)
            self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.LINESTART:
            self.clamp(text)
            self._move_to_first()
            self._line_start(text)
            self.has_preferred_x = False
        elif base == Key.LINEEND:
            self.clamp(text)
            self._move_to_first()
            self._line_end(text)
            self.has_preferred_x = False

    def _shift_key(self, text: MonospaceText, base: int) -> None:
        if base == Key.LEFT:
            self.clamp(text)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end -= 1
            self.cursor = self.select_end
            self.has_preferred_x = False
        elif base == Key.RIGHT:
            self._prep_selection_at_cursor()
            self.select_end += 1
            self.clamp(text)
            self.cursor = self.select_end
            self.has_preferred_x = False
        elif base in (Key.WORDLEFT, Key.WORDRIGHT):
            if not self.has_selection():
                self._prep_selection_at_cursor()
            move = _move_word_left if base == Key.WORDLEFT else _move_word_right
            self.cursor = move(text, self.cursor)
            self.select_end = self.cursor
            self.clamp(text)
        elif base in (Key.DELETE, Key.BACKSPACE):
            self._erase(text, base)
        elif base == Key.TEXTSTART:
            self._prep_selection_at_cursor()
            self.cursor = self.select_end = 0
            self.has_preferred_x = False
        elif base == Key.TEXTEND:
            self._prep_selection_at_cursor()
            self.cursor = self.select_end = len(text)
            self.has_preferred_x = False
        elif base == Key.LINESTART:
            self.clamp(text)
            self._prep_selection_at_cursor()
            self._line_start(text)
            self.select_end = self.cursor
            self.has_preferred_x = False
        elif base == Key.LINEEND:
            self.clamp(text)
            self._prep_selection_at_cursor()
            self._line_end(text)
            self.select_end = self.cursor
            self.has_preferred_x = False

    def _erase(self, text: MonospaceText, base: int) -> None:
        if self.has_selection():
            self._delete_selection(text)
        elif base == Key.DELETE:
            if self.cursor < len(text):
                self._delete(text, self.cursor, 1)
        else:
            self.clamp(text)
            if self.cursor > 0:
                self._delete(text, self.cursor - 1, 1)
                self.cursor -= 1
        self.has_preferred_x = False