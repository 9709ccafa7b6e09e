"""Bounded undo/redo history for the text editing state machine."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .textedit_layout import MonospaceText

DEFAULT_STATE_COUNT = 99
DEFAULT_CHAR_COUNT = 999
_EMPTY_CHAR = "\0"


@dataclass
class UndoRecord:
    """One edit: at ``where``, insert ``insert_length`` stored characters, delete ``delete_length``."""

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Undo and redo records sharing one fixed-size record and character store.

    Undo records grow upward from the start of both stores; redo records grow
    downward from their ends.
    """

    def __init__(
        self,
        state_count: int = DEFAULT_STATE_COUNT,
        char_count: int = DEFAULT_CHAR_COUNT,
    ) -> None:
        if state_count < 1 or char_count < 1:
            raise ValueError("state_count and char_count must be positive")
        self.state_count = state_count
        self.char_count = char_count
        self.records = [UndoRecord() for _ in range(state_count)]
        self.chars = [_EMPTY_CHAR] * char_count
        self.undo_point = 0
        self.redo_point = state_count
        self.undo_char_point = 0
        self.redo_char_point = char_count

    def clear(self) -> None:
        """Forget all undo and redo history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def flush_redo(self) -> None:
        """Drop every redo record."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record, freeing its characters."""
        if self.undo_point <= 0:
            return
        first = self.records[0]
        if first.char_storage >= 0:
            n = first.insert_length
            self.undo_char_point -= n
            end = self.undo_char_point
            self.chars[0:end] = self.chars[n : n + end]
            for record in self.records[: self.undo_point]:
                if record.char_storage >= 0:
                    record.char_storage -= n
        self.undo_point -= 1
        count = self.undo_point
        self.records[0:count] = [replace(r) for r in self.records[1 : count + 1]]

    def discard_redo(self) -> None:
        """Drop the oldest redo record, freeing its characters."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        last = self.records[k]
        if last.char_storage >= 0:
            n = last.insert_length
            self.redo_char_point += n
            start = self.redo_char_point
            self.chars[start : self.char_count] = self.chars[start - n : self.char_count - n]
            for record in self.records[self.redo_point : k]:
                if record.char_storage >= 0:
                    record.char_storage += n
        rp = self.redo_point
        move = self.state_count - rp - 1
        self.records[rp + 1 : rp + 1 + move] = [
            replace(r) for r in self.records[rp : rp + move]
        ]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> UndoRecord | None:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        record = UndoRecord()
        self.records[self.undo_point] = record
        self.undo_point += 1
        return record

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> UndoRecord | None:
        """Add an undo record and reserve room for ``insert_len`` characters.

        Returns the new record, or None if the characters can never fit.
        """
        record = self._create_record(insert_len)
        if record is None:
            return None
        record.where = pos
        record.insert_length = insert_len
        record.delete_length = delete_len
        if insert_len == 0:
            record.char_storage = -1
        else:
            record.char_storage = self.undo_char_point
            self.undo_char_point += insert_len
        return record

    def _store(self, record: UndoRecord | None, text: MonospaceText, where: int, length: int) -> None:
        if record is None or record.char_storage < 0:
            return
        for i in range(length):
            self.chars[record.char_storage + i] = text.char_at(where + i)

    def make_undo_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters were inserted at ``where``."""
        self.create_undo(where, 0, length)

    def make_undo_delete(self, text: MonospaceText, where: int, length: int) -> None:
        """Record the ``length`` characters at ``where`` that are about to be deleted."""
        record = self.create_undo(where, length, 0)
        self._store(record, text, where, length)

    def make_undo_replace(
        self, text: MonospaceText, where: int, old_length: int, new_length: int
    ) -> None:
        """Record that ``old_length`` characters at ``where`` become ``new_length`` new ones."""
        record = self.create_undo(where, old_length, new_length)
        self._store(record, text, where, old_length)

    def _stored(self, record: UndoRecord) -> str:
        start = record.char_storage
        return "".join(self.chars[start : start + record.insert_length])

    def undo(self, text: MonospaceText) -> int | None:
        """Revert the latest edit in ``text``; return the new cursor, or None if nothing was undone."""
        if self.undo_point == 0:
            return None

        u = replace(self.records[self.undo_point - 1])
        r = self.records[self.redo_point - 1]
        r.char_storage = -1
        r.insert_length = u.delete_length
        r.delete_length = u.insert_length
        r.where = u.where

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                r = self.records[self.redo_point - 1]
                r.char_storage = self.redo_char_point - u.delete_length
                self.redo_char_point = r.char_storage
                for i in range(u.delete_length):
                    self.chars[r.char_storage + i] = text.char_at(u.where + i)
            text.delete(u.where, u.delete_length)

        if u.insert_length:
            text.insert(u.where, self._stored(u))
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, text: MonospaceText) -> int | None:
        """Reapply the latest undone edit; return the new cursor, or None if nothing was redone."""
        if self.redo_point == self.state_count:
            return None

        u = self.records[self.undo_point]
        r = replace(self.records[self.redo_point])
        u.delete_length = r.insert_length
        u.insert_length = r.delete_length
        u.where = r.where
        u.char_storage = -1

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u.insert_length = 0
                u.delete_length = 0
            else:
                u.char_storage = self.undo_char_point
                self.undo_char_point += u.insert_length
                for i in range(u.insert_length):
                    self.chars[u.char_storage + i] = text.char_at(u.where + i)
            text.delete(r.where, r.delete_length)

        if r.insert_length:
            text.insert(r.where, self._stored(r))
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length