import random

import pytest

from lorenzview.rectpack import MAX_VAL, Heuristic, Packer, PackRect


def _overlap(a, b):
    return (
        a.x < b.x + b.w
        and b.x < a.x + a.w
        and a.y < b.y + b.h
        and b.y < a.y + a.h
    )


def _check_layout(rects, width, height):
    packed = [r for r in rects if r.was_packed and r.w and r.h]
    for r in packed:
        assert 0 <= r.x and r.x + r.w <= width
        assert 0 <= r.y and r.y + r.h <= height
    for i, a in enumerate(packed):
        for b in packed[i + 1 :]:
            assert not _overlap(a, b)


def test_single_rect_at_origin():
    packer = Packer(64, 64)
    rect = PackRect(10, 10)
    assert packer.pack_rects([rect]) is True
    assert (rect.x, rect.y, rect.was_packed) == (0, 0, True)


def test_too_wide_rect_fails():
    packer = Packer(16, 16)
    rects = [PackRect(20, 4, id=1), PackRect(4, 4, id=2)]
    assert packer.pack_rects(rects) is False
    assert rects[0].was_packed is False
    assert (rects[0].x, rects[0].y) == (MAX_VAL, MAX_VAL)
    assert rects[1].was_packed is True


def test_empty_rect_needs_no_space():
    packer = Packer(8, 8)
    rect = PackRect(0, 5)
    assert packer.pack_rects([rect]) is True
    assert (rect.x, rect.y, rect.was_packed) == (0, 0, True)


def test_original_order_and_ids_preserved():
    packer = Packer(100, 100)
    rects = [PackRect(5, 5, id=0), PackRect(30, 40, id=1), PackRect(10, 20, id=2)]
    packer.pack_rects(rects)
    assert [r.id for r in rects] == [0, 1, 2]
    # Tallest rectangle goes first, at the origin.
    assert (rects[1].x, rects[1].y) == (0, 0)


@pytest.mark.parametrize(
    "heuristic", [Heuristic.SKYLINE_BL_SORT_HEIGHT, Heuristic.SKYLINE_BF_SORT_HEIGHT]
)
def test_random_rects_do_not_overlap(heuristic):
    rng = random.Random(1234)
    rects = [PackRect(rng.randint(1, 20), rng.randint(1, 20), id=i) for i in range(60)]
    packer = Packer(128, 128)
    packer.setup_heuristic(heuristic)
    result = packer.pack_rects(rects)
    assert result == all(r.was_packed for r in rects)
    _check_layout(rects, 128, 128)


def test_repeated_calls_continue_in_same_target():
    packer = Packer(32, 32)
    first = [PackRect(32, 10)]
    second = [PackRect(32, 10)]
    assert packer.pack_rects(first)
    assert packer.pack_rects(second)
    assert not _overlap(first[0], second[0])
    assert second[0].y >= 10


def test_out_of_memory_when_allowed():
    packer = Packer(10, 10, 1)
    packer.setup_allow_out_of_mem(True)
    rects = [PackRect(3, 3), PackRect(3, 3)]
    assert packer.pack_rects(rects) is False
    assert rects[0].was_packed is True
    assert rects[1].was_packed is False


def test_quantised_widths_avoid_running_out():
    packer = Packer(10, 10, 1)
    rects = [PackRect(3, 3), PackRect(3, 3)]
    assert packer.pack_rects(rects) is True
    _check_layout(rects, 10, 10)
    assert {r.x for r in rects} == {0}


def test_full_target_rejects_more():
    packer = Packer(10, 10)
    assert packer.pack_rects([PackRect(10, 10)])
    extra = PackRect(1, 1)
    assert packer.pack_rects([extra]) is False
    assert extra.was_packed is False


def test_unknown_heuristic_rejected():
    with pytest.raises(ValueError):
        Packer(10, 10).setup_heuristic(7)


def test_zero_nodes_rejected():
    with pytest.raises(ValueError):
        Packer(10, 10, 0)