#!/usr/bin/env python3
"""
Random tile spawning for merge2048.
"""

import logging
import random

from ..utils import config
from .state import BoardInvariantError
from .tile import Number

logger = logging.getLogger(__name__)


def spawn_tile(state, generation, rng=None):
    """
    Add a new "2" or "4" tile to a uniformly chosen empty cell.
    One spawn in config.FOUR_TILE_ODDS is a "4".
    Returns False, leaving the state untouched, if the board is full.
    """
    if state.open_cells == 0:
        return False
    rng = rng or random

    # Collect random numbers
    insert_index = rng.randrange(state.open_cells)
    power = 2 if rng.randrange(config.FOUR_TILE_ODDS) == config.FOUR_TILE_ODDS - 1 else 1

    board = state.board
    seen = 0
    for pos in board.interior():
        if not board[pos].is_empty:
            continue
        if seen == insert_index:
            board[pos] = Number(power, generation)
            state.open_cells -= 1
            state.max_power = max(state.max_power, power)
            logger.debug("Spawned %d at %s", 2 ** power, pos)
            return True
        seen += 1

    raise BoardInvariantError(
        f"open cell count is {state.open_cells} but only {seen} empty cells were found")
