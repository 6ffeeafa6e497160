#!/usr/bin/env python3
"""
Tile values for the 2048 board.
A cell is either empty, a numbered tile, or a piece of the border ring.
"""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'


class EdgeSide(Enum):
    TOP = 'top'
    BOTTOM = 'bottom'
    LEFT = 'left'
    RIGHT = 'right'


class CornerSide(Enum):
    TOP_LEFT = 'top_left'
    TOP_RIGHT = 'top_right'
    BOTTOM_LEFT = 'bottom_left'
    BOTTOM_RIGHT = 'bottom_right'


class Tile:
    """Base class for every cell value. Tiles are immutable."""

    is_empty = False
    is_number = False
    is_border = False

    def merge(self, other, generation):
        """
        Return the tile that results from moving `other` onto this cell,
        or None if `other` cannot move here.
        """
        return None


@dataclass(frozen=True)
class Empty(Tile):
    is_empty = True

    def merge(self, other, generation):
        # Shift number tile to fill space
        if other.is_number:
            return other
        return None


@dataclass(frozen=True)
class Number(Tile):
    power: int
    generation: int = 0

    is_number = True

    @property
    def value(self):
        return 2 ** self.power

    def merge(self, other, generation):
        # A tile stamped with this generation already merged during this move
        if (other.is_number and other.power == self.power
                and self.generation != generation and other.generation != generation):
            return Number(self.power + 1, generation)
        return None


@dataclass(frozen=True)
class Border(Tile):
    side: object  # EdgeSide or CornerSide

    is_border = True


EMPTY = Empty()
