#!/usr/bin/env python3
"""
Slide and merge logic for merge2048.
Applies one directional move to a GameState in place.
"""

import logging

from .tile import EMPTY

logger = logging.getLogger(__name__)


def _slide_line(state, line, generation):
    """
    Slide and merge one line. `line` lists coordinates starting at the wall.
    Returns whether any tile changed position or power.
    """
    board = state.board
    moved = False
    # Next slot a non-merging tile settles into
    frontier = 0

    for i, pos in enumerate(line):
        tile = board[pos]
        if not tile.is_number:
            continue

        if frontier > 0:
            target = line[frontier - 1]
            merged = board[target].merge(tile, generation)
            if merged is not None:
                board[target] = merged
                board[pos] = EMPTY
                state.score += merged.value
                state.open_cells += 1
                state.max_power = max(state.max_power, merged.power)
                moved = True
                continue

        if i != frontier:
            board[line[frontier]] = tile
            board[pos] = EMPTY
            moved = True
        frontier += 1

    return moved


def update(state, direction, generation):
    """
    Slide every line of the board toward `direction`.
    A tile merges at most once per call: merge results carry `generation`
    and tiles stamped with it refuse to merge again.
    Returns True if the board changed.
    """
    moved = False
    for line in state.board.lines(direction):
        moved |= _slide_line(state, line, generation)
    if moved:
        logger.debug("Move %s (generation %d): score %d, open cells %d",
                     direction.value, generation, state.score, state.open_cells)
    return moved


def preview(state, direction):
    """Check whether a move would change the board, without touching it."""
    # Any generation works here: a fresh stamp never blocks a merge
    return update(state.copy(), direction, -1)
