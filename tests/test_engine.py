import random

import pytest

from merge2048.game import engine
from merge2048.game.state import GameState
from merge2048.game.tile import Direction, Number

from helpers import all_values, row_values


def reference_slide(values):
    """Plain compress / merge / compress of one line of values, wall first."""
    tiles = [v for v in values if v]
    merged, gained, i = [], 0, 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged.append(tiles[i] * 2)
            gained += tiles[i] * 2
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    return merged + [0] * (len(values) - len(merged)), gained


def line_values(state, line):
    return [state.board[pos].value if state.board[pos].is_number else 0 for pos in line]


def random_state(rnd, size=4):
    rows = [[rnd.choice([0, 0, 2, 2, 4, 8]) for _ in range(size)] for _ in range(size)]
    return GameState.from_values(rows)


def test_three_equal_tiles_merge_only_once():
    state = GameState.from_values([[2, 2, 2, 0], [0] * 4, [0] * 4, [0] * 4])
    assert engine.update(state, Direction.LEFT, 1)
    assert row_values(state, 0) == [4, 2, 0, 0]
    assert state.score == 4


def test_gap_is_closed_before_merging_to_the_right():
    state = GameState.from_values([[0, 4, 0, 4], [0] * 4, [0] * 4, [0] * 4])
    assert engine.update(state, Direction.RIGHT, 1)
    assert row_values(state, 0) == [0, 0, 0, 8]
    assert state.score == 8
    assert state.max_power == 3


def test_merged_tile_does_not_merge_with_slid_tile():
    state = GameState.from_values([[2, 0, 2, 2], [0] * 4, [0] * 4, [0] * 4])
    engine.update(state, Direction.LEFT, 1)
    assert row_values(state, 0) == [4, 2, 0, 0]


def test_two_pairs_merge_independently():
    state = GameState.from_values([[2, 2, 2, 2], [0] * 4, [0] * 4, [0] * 4])
    engine.update(state, Direction.LEFT, 1)
    assert row_values(state, 0) == [4, 4, 0, 0]
    assert state.score == 8
    assert state.open_cells == 14


def test_columns_move_up_and_down():
    rows = [[2, 0, 0, 0],
            [2, 0, 0, 0],
            [4, 0, 0, 0],
            [0, 0, 0, 0]]
    state = GameState.from_values(rows)
    engine.update(state, Direction.DOWN, 1)
    assert [r[0] for r in all_values(state)] == [0, 0, 4, 4]

    state = GameState.from_values(rows)
    engine.update(state, Direction.UP, 1)
    assert [r[0] for r in all_values(state)] == [4, 4, 0, 0]


def test_merge_results_carry_the_generation():
    state = GameState.from_values([[2, 2, 4, 0], [0] * 4, [0] * 4, [0] * 4])
    engine.update(state, Direction.LEFT, 7)
    assert state.board[1, 1] == Number(2, 7)
    # The slid tile keeps its old stamp
    assert state.board[1, 2] == Number(2, 0)


def test_tiles_from_an_earlier_generation_merge_again():
    state = GameState.from_values([[2, 2, 4, 0], [0] * 4, [0] * 4, [0] * 4])
    engine.update(state, Direction.LEFT, 1)
    engine.update(state, Direction.LEFT, 2)
    assert row_values(state, 0) == [8, 0, 0, 0]
    assert state.score == 4 + 8


def test_blocked_move_reports_no_change():
    rows = [[2, 4, 0, 0], [0] * 4, [0] * 4, [0] * 4]
    state = GameState.from_values(rows)
    before = state.board.copy()
    assert not engine.update(state, Direction.LEFT, 1)
    assert state.board == before
    assert state.score == 0


def test_full_board_without_pairs_cannot_move():
    rows = [[2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 2]]
    state = GameState.from_values(rows)
    before = state.board.copy()
    for direction in Direction:
        assert not engine.update(state, direction, 1)
    assert state.board == before
    assert state.open_cells == 0


def test_preview_leaves_state_untouched():
    state = GameState.from_values([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    assert engine.preview(state, Direction.LEFT)
    assert not engine.preview(state, Direction.UP)
    assert row_values(state, 0) == [2, 2, 0, 0]
    assert state.score == 0


@pytest.mark.parametrize("direction", list(Direction))
def test_random_boards_match_plain_slide_rules(direction):
    rnd = random.Random(direction.value)
    generation = 1
    for _ in range(300):
        state = random_state(rnd)
        lines = list(state.board.lines(direction))
        expected = [reference_slide(line_values(state, line)) for line in lines]
        score_before = state.score
        before = state.board.copy()

        moved = engine.update(state, direction, generation)

        for line, (values, _) in zip(lines, expected):
            assert line_values(state, line) == values
        gained = sum(g for _, g in expected)
        assert state.score - score_before == gained
        state.check_invariants()

        # Every merge result, and only those, carries this generation
        tiles = [state.board[pos] for pos in state.board.interior()]
        stamped = [t for t in tiles if t.is_number and t.generation == generation]
        assert sum(t.value for t in stamped) == gained

        if not moved:
            assert state.board == before
        else:
            assert state.board != before


def test_max_power_never_decreases():
    rnd = random.Random(11)
    state = random_state(rnd)
    seen = state.max_power
    for generation in range(1, 200):
        engine.update(state, rnd.choice(list(Direction)), generation)
        assert state.max_power >= seen
        seen = state.max_power
        assert state.board.powers().max() <= seen
