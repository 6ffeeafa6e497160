#!/usr/bin/env python3
"""
Game state for merge2048.
GameState aggregates the board with its running counters; SharedState
guards one GameState for the mutator and renderer threads.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..utils import config
from .board import Board


class BoardInvariantError(RuntimeError):
    """The board counters no longer describe the board. Always a bug."""


class Status(Enum):
    PLAYING = 'playing'
    WON = 'won'
    GAME_OVER = 'game_over'
    SHUTTING_DOWN = 'shutting_down'


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Immutable copy of everything a renderer needs for one frame."""

    cells: tuple
    powers: np.ndarray
    score: int
    max_power: int
    open_cells: int
    moves: int
    status: Status

    @property
    def size(self):
        return self.powers.shape[0]

    @property
    def max_tile(self):
        return 2 ** self.max_power if self.max_power else 0

    @property
    def won(self):
        return self.max_power >= config.WIN_POWER

    @property
    def game_over(self):
        return self.status == Status.GAME_OVER

    def values(self):
        """Displayed tile values, 0 for empty cells."""
        values = np.left_shift(1, self.powers.astype(np.int64))
        return np.where(self.powers > 0, values, 0)


class GameState:
    """
    The unit of shared mutable state: board, score, open cell count and the
    largest power seen so far. Only the move engine and the spawner mutate it.
    """

    def __init__(self, board=None):
        self.board = board if board is not None else Board()
        self.score = 0
        self.moves = 0
        self.final_status = None
        self.open_cells = self.board.count_empty()
        self.max_power = max(
            (self.board[pos].power for pos in self.board.interior() if self.board[pos].is_number),
            default=0,
        )

    @classmethod
    def from_values(cls, rows):
        return cls(Board.from_values(rows))

    @property
    def won(self):
        return self.max_power >= config.WIN_POWER

    @property
    def status(self):
        if self.final_status is not None:
            return self.final_status
        return Status.WON if self.won else Status.PLAYING

    def copy(self):
        clone = GameState.__new__(GameState)
        clone.__dict__.update(self.__dict__)
        clone.board = self.board.copy()
        return clone

    def check_invariants(self):
        empty = self.board.count_empty()
        if empty != self.open_cells:
            raise BoardInvariantError(
                f"open cell count is {self.open_cells} but the board has {empty} empty cells")

    def snapshot(self):
        return Snapshot(
            cells=self.board.rows(),
            powers=self.board.powers(),
            score=self.score,
            max_power=self.max_power,
            open_cells=self.open_cells,
            moves=self.moves,
            status=self.status,
        )


class SharedState:
    """
    One GameState behind a single lock. Writers hold it for an update+spawn
    pair; readers only long enough to take a snapshot.
    """

    def __init__(self, state):
        self._state = state
        self._lock = threading.Lock()

    @contextmanager
    def write(self):
        with self._lock:
            yield self._state

    def snapshot(self):
        with self._lock:
            return self._state.snapshot()
