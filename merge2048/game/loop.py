#!/usr/bin/env python3
"""
Game loop for merge2048.
Reads input bytes, applies them to the shared game state and wakes the
renderer after every effective move.
"""

import logging
from collections import namedtuple
from enum import Enum

from ..utils import config
from . import engine
from .board import Board
from .frames import RenderWorker
from .spawn import spawn_tile
from .state import BoardInvariantError, GameState, SharedState, Status
from .tile import Direction

logger = logging.getLogger(__name__)

ApplyResult = namedtuple('ApplyResult', ['moved', 'game_over', 'shutdown'])
GameResult = namedtuple('GameResult', ['status', 'score', 'max_tile', 'moves'])


class RenderError(RuntimeError):
    """The renderer thread stopped with an exception."""


class Action(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'
    SHUTDOWN = 'shutdown'
    CONTINUE = 'continue'

    @property
    def direction(self):
        return Direction(self.value) if self in _MOVES else None


_MOVES = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


def parse_input(byte):
    """Map one input byte to an Action. None means the input ran out."""
    if byte is None or byte == config.SHUTDOWN_BYTE:
        return Action.SHUTDOWN
    name = config.KEY_BINDINGS.get(byte)
    if name is None:
        return Action.CONTINUE
    return Action(name)


def new_game(rng=None):
    """Create a game with the initial tiles spawned at generation 0."""
    state = GameState(Board())
    for _ in range(config.INITIAL_TILES):
        spawn_tile(state, 0, rng)
    return state


def can_move(state):
    """Check if any valid moves remain."""
    if state.open_cells > 0:
        return True
    return any(engine.preview(state, direction) for direction in Direction)


def apply(state, input_byte, generation, rng=None):
    """
    Apply one input byte. Effective moves spawn a tile stamped with
    `generation`; the caller advances the generation when `moved` is True.
    """
    action = parse_input(input_byte)
    if action == Action.SHUTDOWN:
        return ApplyResult(False, False, True)
    if action == Action.CONTINUE:
        return ApplyResult(False, False, False)

    moved = engine.update(state, action.direction, generation)
    if moved:
        # A slide needs an empty cell and a merge frees one
        if not spawn_tile(state, generation, rng):
            raise BoardInvariantError("board is full after an effective move")
        state.moves += 1

    game_over = state.open_cells == 0 and not can_move(state)
    return ApplyResult(moved, game_over, False)


class GameLoop:
    """
    Mutator side of the game. `read_input` is a blocking callable returning
    one byte (int) or None at end of input; `render` is an optional sink
    called with a Snapshot on the renderer thread.
    """

    def __init__(self, read_input, render=None, rng=None, frame_interval=None, state=None):
        self.read_input = read_input
        self.render = render
        self.rng = rng
        self.frame_interval = frame_interval
        self.shared = SharedState(state if state is not None else new_game(rng))
        # Initial tiles carry generation 0, so the first move starts at 1
        self.generation = 1
        self.worker = None

    def _step(self, byte):
        with self.shared.write() as state:
            result = apply(state, byte, self.generation, self.rng)
            if result.moved:
                self.generation += 1
            if result.game_over:
                state.final_status = Status.GAME_OVER
            elif result.shutdown:
                state.final_status = Status.SHUTTING_DOWN
        return result

    def _finish(self):
        with self.shared.write() as state:
            if state.final_status is None:
                state.final_status = Status.SHUTTING_DOWN

    def run(self):
        if self.render is not None:
            self.worker = RenderWorker(self.shared, self.render, frame_interval=self.frame_interval)
            self.worker.start()
            self.worker.wake()

        try:
            while self.worker is None or not self.worker.failed:
                result = self._step(self.read_input())
                # Only wake the renderer once the lock is released
                if result.moved and self.worker is not None:
                    self.worker.wake()
                if result.game_over:
                    logger.debug("Game over after %d moves", self.generation - 1)
                    break
                if result.shutdown:
                    logger.debug("Shutdown requested")
                    break
            self._finish()
        finally:
            if self.worker is not None:
                self.worker.stop()

        if self.worker is not None and self.worker.error is not None:
            raise RenderError(f"Renderer failed: {self.worker.error}") from self.worker.error

        snapshot = self.shared.snapshot()
        return GameResult(snapshot.status, snapshot.score, snapshot.max_tile, snapshot.moves)
