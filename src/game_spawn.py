"""
tile spawning after a turn
"""

SPAWN_POLICIES = ('anywhere', 'adjacent')


def spawn_candidates(board, policy='anywhere'):
    """
    empty cells eligible for a new tile

    'anywhere' allows every empty cell, 'adjacent' only empty cells that
    touch an occupied one
    """
    if policy == 'anywhere':
        return board.empty_coordinates()
    if policy == 'adjacent':
        return board.empty_coordinates(board.adjacent_to_nonempty())
    raise ValueError(f"unknown spawn policy {policy!r}, expected one of {SPAWN_POLICIES}")


def random_tile_value(rng, base=2, double_probability=0.0):
    """base value, or twice the base with probability double_probability"""
    if double_probability > 0 and rng.random() < double_probability:
        return base * 2
    return base


def spawn_tile(board, rng, value=2, policy='anywhere'):
    """
    put a tile of `value` on a uniformly chosen eligible empty cell

    args:
        board: Board to mutate
        rng: numpy Generator (anything with integers(n))
        value: tile value to place
        policy: 'anywhere' or 'adjacent'

    returns:
        the (row, col) that was filled, or None when no cell is eligible
    """
    candidates = spawn_candidates(board, policy)
    if not candidates:
        return None

    row, col = candidates[int(rng.integers(len(candidates)))]
    board.set(row, col, value)
    return (row, col)
