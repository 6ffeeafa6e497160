#!/usr/bin/env python3
"""
Console interface for merge2048.
Draws the board with curses and feeds raw keyboard bytes to the game loop.
"""

import curses
import sys

from ..game.loop import GameLoop
from ..game.state import Status
from ..game.tile import CornerSide, EdgeSide
from .inputs import FdReader

CELL_WIDTH = 6
LEFT_MARGIN = 6

WIN_MESSAGE = "- - - - you win!! - - - -"
GAME_OVER_MESSAGE = "- - - - game over - - - -"
GOODBYE_MESSAGE = "- - - - goodbye now - - -"

_BORDER_TEXT = {
    CornerSide.TOP_LEFT: "┌",
    CornerSide.TOP_RIGHT: "┐",
    CornerSide.BOTTOM_LEFT: "└",
    CornerSide.BOTTOM_RIGHT: "┘",
    EdgeSide.TOP: "─" * CELL_WIDTH,
    EdgeSide.BOTTOM: "─" * CELL_WIDTH,
    EdgeSide.LEFT: "│",
    EdgeSide.RIGHT: "│",
}

# Tile colours cycle through this palette as the power grows
_PALETTE = (
    curses.COLOR_WHITE,
    curses.COLOR_YELLOW,
    curses.COLOR_RED,
    curses.COLOR_MAGENTA,
    curses.COLOR_BLUE,
    curses.COLOR_CYAN,
    curses.COLOR_GREEN,
)


def tile_text(tile):
    """Fixed-width text for one cell of the board."""
    if tile.is_number:
        return f"{tile.value:^{CELL_WIDTH}}"
    if tile.is_border:
        return _BORDER_TEXT[tile.side]
    return " " * CELL_WIDTH


def format_board(snapshot):
    """Render a snapshot as plain text lines, border ring included."""
    lines = ["".join(tile_text(tile) for tile in row) for row in snapshot.cells]
    lines.append("")
    lines.append(f"score is {snapshot.score}")
    if snapshot.won:
        lines.append(WIN_MESSAGE)
    if snapshot.game_over:
        lines.append(GAME_OVER_MESSAGE)
    return lines


def end_message(result):
    message = GAME_OVER_MESSAGE if result.status == Status.GAME_OVER else GOODBYE_MESSAGE
    return f"{message}\nscore is {result.score}, best tile {result.max_tile}"


def colour_pair(power):
    return 1 + (power - 1) % len(_PALETTE)


class ConsoleRenderer:
    """Render sink drawing snapshots on a curses screen."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.colours = curses.has_colors()
        if self.colours:
            curses.start_color()
            curses.use_default_colors()
            for i, colour in enumerate(_PALETTE):
                curses.init_pair(i + 1, colour, -1)

    def _attr(self, tile):
        if not (self.colours and tile.is_number):
            return curses.A_NORMAL
        return curses.color_pair(colour_pair(tile.power)) | curses.A_BOLD

    def __call__(self, snapshot):
        stdscr = self.stdscr
        stdscr.erase()

        # Draw the board cell by cell so each tile gets its colour
        for y, row in enumerate(snapshot.cells):
            x = LEFT_MARGIN
            for tile in row:
                text = tile_text(tile)
                stdscr.addstr(y + 1, x, text, self._attr(tile))
                x += len(text)

        # Print score and banners below the board
        footer = format_board(snapshot)[len(snapshot.cells):]
        for i, line in enumerate(footer):
            stdscr.addstr(len(snapshot.cells) + 1 + i, LEFT_MARGIN, line)
        stdscr.addstr(len(snapshot.cells) + 2 + len(footer), LEFT_MARGIN,
                      "w/a/s/d to move, Ctrl-C to quit")

        stdscr.refresh()


def _play(stdscr, rng, frame_interval):
    # Raw mode so Ctrl-C arrives as a byte instead of a signal
    curses.raw()
    try:
        curses.curs_set(0)  # Hide cursor
    except curses.error:
        pass

    loop = GameLoop(FdReader(sys.stdin.fileno()), ConsoleRenderer(stdscr),
                    rng=rng, frame_interval=frame_interval)
    return loop.run()


def run_console(rng=None, frame_interval=None):
    """Run the console UI. The terminal is restored before this returns or raises."""
    result = curses.wrapper(_play, rng, frame_interval)
    print(end_message(result))
    return result
