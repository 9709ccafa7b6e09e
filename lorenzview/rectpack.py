"""Skyline bottom-left rectangle packing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MAX_VAL = 0x7FFFFFFF
_SENTINEL_Y = 1 << 30


class Heuristic(IntEnum):
    """Placement heuristics for the skyline packer."""

    SKYLINE_DEFAULT = 0
    SKYLINE_BL_SORT_HEIGHT = 0
    SKYLINE_BF_SORT_HEIGHT = 1


@dataclass
class PackRect:
    """A rectangle to pack; ``x``, ``y`` and ``was_packed`` are filled in."""

    w: int
    h: int
    id: int = 0
    x: int = 0
    y: int = 0
    was_packed: bool = False


@dataclass
class _Node:
    x: int
    y: int


@dataclass
class _FindResult:
    x: int
    y: int
    index: int | None


class Packer:
    """Packs rectangles into a fixed-size target using a skyline."""

    def __init__(self, width: int, height: int, num_nodes: int | None = None) -> None:
        if num_nodes is None:
            num_nodes = width
        if num_nodes < 1:
            raise ValueError("num_nodes must be at least 1")
        self.width = width
        self.height = height
        self.num_nodes = num_nodes
        self.heuristic = Heuristic.SKYLINE_DEFAULT
        self.align = 1
        self.setup_allow_out_of_mem(False)
        # The last node is a sentinel marking the right edge.
        self._skyline = [_Node(0, 0), _Node(width, _SENTINEL_Y)]

    def setup_allow_out_of_mem(self, allow_out_of_mem: bool) -> None:
        """Choose exact widths (may run out of nodes) or quantised widths."""
        if allow_out_of_mem:
            self.align = 1
        else:
            self.align = (self.width + self.num_nodes - 1) // self.num_nodes

    def setup_heuristic(self, heuristic: Heuristic | int) -> None:
        """Select the placement heuristic."""
        try:
            self.heuristic = Heuristic(heuristic)
        except ValueError:
            raise ValueError(f"unknown heuristic: {heuristic!r}") from None

    @property
    def _free_nodes(self) -> int:
        return self.num_nodes + 2 - len(self._skyline)

    def _find_min_y(self, first: int, x0: int, width: int) -> tuple[int, int]:
        nodes = self._skyline
        x1 = x0 + width
        min_y = 0
        waste = 0
        visited = 0
        i = first
        while nodes[i].x < x1:
            node = nodes[i]
            next_x = nodes[i + 1].x
            if node.y > min_y:
                waste += visited * (node.y - min_y)
                min_y = node.y
                visited += next_x - x0 if node.x < x0 else next_x - node.x
            else:
                under = next_x - node.x
                if under + visited > width:
                    under = width - visited
                waste += under * (min_y - node.y)
                visited += under
            i += 1
        return min_y, waste

    def _find_best_pos(self, width: int, height: int) -> _FindResult:
        nodes = self._skyline
        width += self.align - 1
        width -= width % self.align

        if width > self.width or height > self.height:
            return _FindResult(0, 0, None)

        best_waste = _SENTINEL_Y
        best_y = _SENTINEL_Y
        best: int | None = None

        i = 0
        while nodes[i].x + width <= self.width:
            y, waste = self._find_min_y(i, nodes[i].x, width)
            if self.heuristic == Heuristic.SKYLINE_BL_SORT_HEIGHT:
                if y < best_y:
                    best_y = y
                    best = i
            elif y + height <= self.height:
                if y < best_y or (y == best_y and waste < best_waste):
                    best_y = y
                    best_waste = waste
                    best = i
            i += 1

        best_x = 0 if best is None else nodes[best].x

        if self.heuristic == Heuristic.SKYLINE_BF_SORT_HEIGHT:
            tail = 0
            node = 0
            while nodes[tail].x < width:
                tail += 1
            while tail < len(nodes):
                xpos = nodes[tail].x - width
                while nodes[node + 1].x <= xpos:
                    node += 1
                y, waste = self._find_min_y(node, xpos, width)
                if y + height <= self.height and y <= best_y:
                    if y < best_y or waste < best_waste or (
                        waste == best_waste and xpos < best_x
                    ):
                        best_x = xpos
                        best_y = y
                        best_waste = waste
                        best = node
                tail += 1

        return _FindResult(best_x, best_y, best)

    def _pack_rectangle(self, width: int, height: int) -> _FindResult:
        res = self._find_best_pos(width, height)
        if res.index is None or res.y + height > self.height or self._free_nodes == 0:
            res.index = None
            return res

        nodes = self._skyline
        new = _Node(res.x, res.y + height)
        start = res.index + 1 if nodes[res.index].x < res.x else res.index
        right = res.x + width
        end = start
        while end + 1 < len(nodes) and nodes[end + 1].x <= right:
            end += 1
        if nodes[end].x < right:
            nodes[end].x = right
        nodes[start:end] = [new]
        return res

    def pack_rects(self, rects: list[PackRect]) -> bool:
        """Place the rectangles; return True if every one of them fit."""
        order = sorted(range(len(rects)), key=lambda i: (-rects[i].h, -rects[i].w))
        for i in order:
            rect = rects[i]
            if rect.w == 0 or rect.h == 0:
                rect.x = rect.y = 0
                continue
            res = self._pack_rectangle(rect.w, rect.h)
            if res.index is not None:
                rect.x, rect.y = res.x, res.y
            else:
                rect.x = rect.y = MAX_VAL

        all_packed = True
        for rect in rects:
            rect.was_packed = not (rect.x == MAX_VAL and rect.y == MAX_VAL)
            all_packed = all_packed and rect.was_packed
        return all_packed