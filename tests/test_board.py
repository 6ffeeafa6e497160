import numpy as np
import pytest

from merge2048.game.board import Board
from merge2048.game.tile import EMPTY, Border, CornerSide, Direction, EdgeSide, Number
from merge2048.utils import config


def test_new_board_has_border_ring_and_empty_interior():
    board = Board(4)
    assert board.dimension == 6
    assert board[0, 0] == Border(CornerSide.TOP_LEFT)
    assert board[0, 5] == Border(CornerSide.TOP_RIGHT)
    assert board[5, 0] == Border(CornerSide.BOTTOM_LEFT)
    assert board[5, 5] == Border(CornerSide.BOTTOM_RIGHT)
    assert all(board[0, c] == Border(EdgeSide.TOP) for c in range(1, 5))
    assert all(board[5, c] == Border(EdgeSide.BOTTOM) for c in range(1, 5))
    assert all(board[r, 0] == Border(EdgeSide.LEFT) for r in range(1, 5))
    assert all(board[r, 5] == Border(EdgeSide.RIGHT) for r in range(1, 5))
    assert all(board[pos] == EMPTY for pos in board.interior())
    assert board.count_empty() == 16


def test_default_size_comes_from_config():
    config.GRID_SIZE = 5
    assert Board().size == 5


def test_ring_is_read_only():
    board = Board(4)
    with pytest.raises(ValueError):
        board[0, 2] = Number(1)
    with pytest.raises(ValueError):
        board[2, 2] = Border(EdgeSide.TOP)


def test_out_of_range_access_raises_index_error():
    with pytest.raises(IndexError):
        Board(4)[6, 0]


def test_interior_is_row_major():
    coords = list(Board(2).interior())
    assert coords == [(1, 1), (1, 2), (2, 1), (2, 2)]


@pytest.mark.parametrize("direction, expected", [
    (Direction.LEFT, [(2, 1), (2, 2), (2, 3), (2, 4)]),
    (Direction.RIGHT, [(2, 4), (2, 3), (2, 2), (2, 1)]),
    (Direction.UP, [(1, 2), (2, 2), (3, 2), (4, 2)]),
    (Direction.DOWN, [(4, 2), (3, 2), (2, 2), (1, 2)]),
])
def test_lines_start_at_the_wall(direction, expected):
    assert Board(4).line(direction, 1) == expected


def test_from_values_and_powers():
    board = Board.from_values([[2, 0], [4, 2048]])
    assert board[1, 1] == Number(1)
    assert board[2, 2] == Number(11)
    assert board.count_empty() == 1
    np.testing.assert_array_equal(board.powers(), np.array([[1, 0], [2, 11]], dtype=np.uint8))


def test_from_values_rejects_non_powers():
    with pytest.raises(ValueError):
        Board.from_values([[3, 0], [0, 0]])


def test_copy_is_independent():
    board = Board.from_values([[2, 0], [0, 0]])
    clone = board.copy()
    clone[2, 2] = Number(3)
    assert board[2, 2] == EMPTY
    assert clone != board
