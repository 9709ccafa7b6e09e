import pytest

from lorenzview.textedit_layout import MonospaceText
from lorenzview.textedit_undo import UndoState


def _type(state, text, pos, chars):
    text.insert(pos, chars)
    state.make_undo_insert(pos, len(chars))


def _erase(state, text, pos, count):
    state.make_undo_delete(text, pos, count)
    text.delete(pos, count)


def test_defaults_match_source_sizes():
    state = UndoState()
    assert state.state_count == 99
    assert state.char_count == 999
    assert state.redo_point == state.state_count
    assert state.redo_char_point == state.char_count


@pytest.mark.parametrize("counts", [(0, 10), (10, 0), (-1, 5)])
def test_invalid_sizes_raise(counts):
    with pytest.raises(ValueError):
        UndoState(*counts)


def test_undo_with_empty_history_returns_none():
    state = UndoState()
    text = MonospaceText("abc")
    assert state.undo(text) is None
    assert str(text) == "abc"


def test_redo_with_empty_history_returns_none():
    state = UndoState()
    text = MonospaceText("abc")
    assert state.redo(text) is None
    assert str(text) == "abc"


def test_insert_undo_redo_round_trip():
    state = UndoState()
    text = MonospaceText("hello")
    _type(state, text, 5, "!")
    assert str(text) == "hello!"

    cursor = state.undo(text)
    assert str(text) == "hello"
    assert cursor == len("hello")

    cursor = state.redo(text)
    assert str(text) == "hello!"
    assert cursor == len("hello!")


def test_delete_undo_restores_characters():
    state = UndoState()
    text = MonospaceText("hello")
    _erase(state, text, 0, 2)
    assert str(text) == "llo"

    cursor = state.undo(text)
    assert str(text) == "hello"
    assert cursor == len("he")

    cursor = state.redo(text)
    assert str(text) == "llo"
    assert cursor == 0


def test_replace_undo_and_redo():
    state = UndoState()
    text = MonospaceText("hello")
    state.make_undo_replace(text, 1, 1, 1)
    text.delete(1, 1)
    text.insert(1, "a")
    assert str(text) == "hallo"

    state.undo(text)
    assert str(text) == "hello"
    state.redo(text)
    assert str(text) == "hallo"


def test_multiple_undos_in_reverse_order():
    state = UndoState()
    text = MonospaceText("")
    for i, ch in enumerate("abc"):
        _type(state, text, i, ch)
    assert str(text) == "abc"

    state.undo(text)
    assert str(text) == "ab"
    state.undo(text)
    assert str(text) == "a"
    state.undo(text)
    assert str(text) == ""
    assert state.undo(text) is None

    state.redo(text)
    state.redo(text)
    state.redo(text)
    assert str(text) == "abc"
    assert state.redo(text) is None


def test_new_edit_flushes_redo():
    state = UndoState()
    text = MonospaceText("xy")
    _type(state, text, 2, "z")
    state.undo(text)
    assert state.redo_point < state.state_count

    _type(state, text, 0, "w")
    assert state.redo_point == state.state_count
    assert state.redo(text) is None
    assert str(text) == "wxy"


def test_record_limit_discards_oldest():
    state = UndoState(state_count=3, char_count=50)
    text = MonospaceText("")
    for i, ch in enumerate("abcde"):
        _type(state, text, i, ch)
    assert state.undo_point == state.state_count

    undone = 0
    while state.undo(text) is not None:
        undone += 1
    assert undone < len("abcde")
    assert str(text) == "abcde"[: len("abcde") - undone]


def test_deletion_too_large_to_store_clears_history():
    state = UndoState(state_count=10, char_count=4)
    text = MonospaceText("abcdefgh")
    _type(state, text, 8, "!")
    _erase(state, text, 0, 6)
    assert state.undo_point == 0
    assert state.undo(text) is None
    assert str(text) == "gh!"


def test_char_store_pressure_discards_old_records():
    state = UndoState(state_count=10, char_count=4)
    text = MonospaceText("abcdef")
    _erase(state, text, 0, 3)
    _erase(state, text, 0, 3)
    assert str(text) == ""
    assert state.undo_char_point <= state.char_count

    state.undo(text)
    assert str(text) == "def"
    assert state.undo(text) is None


def test_clear_forgets_history():
    state = UndoState()
    text = MonospaceText("ab")
    _type(state, text, 2, "c")
    state.clear()
    assert state.undo(text) is None
    assert state.undo_point == 0
    assert state.undo_char_point == 0
    assert str(text) == "abc"


def test_create_undo_reserves_characters():
    state = UndoState()
    record = state.create_undo(3, 2, 0)
    assert record.where == 3
    assert record.insert_length == 2
    assert record.char_storage == 0
    assert state.undo_char_point == 2


def test_create_undo_without_characters_has_no_storage():
    state = UndoState()
    record = state.create_undo(1, 0, 4)
    assert record.char_storage == -1
    assert record.delete_length == 4
    assert state.undo_char_point == 0


def test_discard_undo_shifts_storage():
    state = UndoState()
    text = MonospaceText("abcdef")
    _erase(state, text, 0, 2)
    _erase(state, text, 0, 2)
    second_storage = state.records[1].char_storage
    state.discard_undo()
    assert state.undo_point == 1
    assert state.records[0].char_storage == second_storage - 2
    state.undo(text)
    assert str(text) == "cdef"


def test_discard_redo_moves_redo_point():
    state = UndoState(state_count=5, char_count=20)
    text = MonospaceText("abcd")
    _erase(state, text, 0, 1)
    _erase(state, text, 0, 1)
    state.undo(text)
    state.undo(text)
    before = state.redo_point
    state.discard_redo()
    assert state.redo_point == before + 1
    assert state.redo_char_point <= state.char_count


def test_undo_redo_preserves_text_over_sequence():
    state = UndoState()
    text = MonospaceText("one two")
    history = [str(text)]
    _type(state, text, 3, "!")
    history.append(str(text))
    _erase(state, text, 0, 2)
    history.append(str(text))
    _type(state, text, len(text), " three")
    history.append(str(text))

    for expected in reversed(history[:-1]):
        state.undo(text)
        assert str(text) == expected
    for expected in history[1:]:
        state.redo(text)
        assert str(text) == expected