class ScriptedRandom:
    """Stand-in for random.Random returning queued randrange results."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


def row_values(state, row):
    """Displayed values of one interior row (0-based), 0 for empty."""
    board = state.board
    values = []
    for c in range(1, board.size + 1):
        tile = board[row + 1, c]
        values.append(tile.value if tile.is_number else 0)
    return values


def all_values(state):
    return [row_values(state, r) for r in range(state.board.size)]
