#!/usr/bin/env python3
"""
Board container for merge2048.
Holds the playable cells plus a one-cell border ring and knows the
traversal order of every line for each direction.
"""

import math

import numpy as np

from ..utils import config
from .tile import EMPTY, Border, CornerSide, Direction, EdgeSide, Number


def _ring_tile(row, col, last):
    """Border tile for a ring coordinate, None for interior cells."""
    top, bottom = row == 0, row == last
    left, right = col == 0, col == last
    if top and left:
        return Border(CornerSide.TOP_LEFT)
    if top and right:
        return Border(CornerSide.TOP_RIGHT)
    if bottom and left:
        return Border(CornerSide.BOTTOM_LEFT)
    if bottom and right:
        return Border(CornerSide.BOTTOM_RIGHT)
    if top:
        return Border(EdgeSide.TOP)
    if bottom:
        return Border(EdgeSide.BOTTOM)
    if left:
        return Border(EdgeSide.LEFT)
    if right:
        return Border(EdgeSide.RIGHT)
    return None


class Board:
    """
    Fixed-size grid of tiles addressed as board[row, col].
    Row and column 0 and `dimension - 1` form the border ring; the
    interior runs from 1 to `size` inclusive.
    """

    def __init__(self, size=None):
        self.size = size if size is not None else config.GRID_SIZE
        self.dimension = self.size + 2
        last = self.dimension - 1
        self._cells = []
        for r in range(self.dimension):
            for c in range(self.dimension):
                ring = _ring_tile(r, c, last)
                self._cells.append(ring if ring is not None else EMPTY)

    @classmethod
    def from_values(cls, rows):
        """
        Build a board from displayed values (0 for an empty cell).
        All tiles are stamped with generation 0.
        """
        board = cls(len(rows))
        for r, row in enumerate(rows):
            if len(row) != board.size:
                raise ValueError("Board rows must form a square")
            for c, value in enumerate(row):
                if value:
                    power = int(math.log2(value))
                    if 2 ** power != value:
                        raise ValueError(f"{value} is not a power of two")
                    board[r + 1, c + 1] = Number(power)
        return board

    def _index(self, key):
        row, col = key
        if not (0 <= row < self.dimension and 0 <= col < self.dimension):
            raise IndexError(f"({row}, {col}) is outside the board")
        return row * self.dimension + col

    def is_interior(self, row, col):
        return 1 <= row <= self.size and 1 <= col <= self.size

    def __getitem__(self, key):
        return self._cells[self._index(key)]

    def __setitem__(self, key, tile):
        if not self.is_interior(*key):
            raise ValueError(f"Border cell {key} is read-only")
        if tile.is_border:
            raise ValueError("Border tiles only belong on the ring")
        self._cells[self._index(key)] = tile

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def copy(self):
        clone = Board.__new__(Board)
        clone.size = self.size
        clone.dimension = self.dimension
        clone._cells = list(self._cells)
        return clone

    def rows(self):
        """All rows including the ring, as tuples of tiles."""
        d = self.dimension
        return tuple(tuple(self._cells[r * d:(r + 1) * d]) for r in range(d))

    def interior(self):
        """Interior coordinates in row-major order."""
        for r in range(1, self.size + 1):
            for c in range(1, self.size + 1):
                yield r, c

    def line(self, direction, index):
        """
        Coordinates of one interior line, starting at the wall the tiles
        slide toward. `index` is 0-based across the interior.
        """
        fixed = index + 1
        forward = range(1, self.size + 1)
        backward = range(self.size, 0, -1)
        if direction == Direction.LEFT:
            return [(fixed, c) for c in forward]
        if direction == Direction.RIGHT:
            return [(fixed, c) for c in backward]
        if direction == Direction.UP:
            return [(r, fixed) for r in forward]
        if direction == Direction.DOWN:
            return [(r, fixed) for r in backward]
        raise ValueError(f"Unknown direction: {direction!r}")

    def lines(self, direction):
        for index in range(self.size):
            yield self.line(direction, index)

    def count_empty(self):
        return sum(1 for pos in self.interior() if self[pos].is_empty)

    def powers(self):
        """Interior powers as a uint8 array, 0 for empty cells."""
        grid = np.zeros((self.size, self.size), dtype=np.uint8)
        for r, c in self.interior():
            tile = self[r, c]
            if tile.is_number:
                grid[r - 1, c - 1] = tile.power
        return grid
