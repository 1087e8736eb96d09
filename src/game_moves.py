"""
move engine: single-pass shift and merge, plus the fixed-point slide
"""
from collections import namedtuple


class InvalidDirection(ValueError):
    """raised for anything that is not one of the four unit moves"""


# (d_row, d_col) for every legal move
DIRECTIONS = {
    'up': (-1, 0),
    'down': (1, 0),
    'left': (0, -1),
    'right': (0, 1),
}

VECTOR_NAMES = {vector: name for name, vector in DIRECTIONS.items()}


SlideResult = namedtuple('SlideResult', ['moved', 'points', 'merges', 'passes'])


def to_direction(value):
    """
    turn a direction name or vector into a (d_row, d_col) tuple

    raises InvalidDirection for anything else
    """
    if isinstance(value, str):
        try:
            return DIRECTIONS[value.lower()]
        except KeyError:
            raise InvalidDirection(f"unknown direction name: {value!r}") from None
    try:
        vector = tuple(int(v) for v in value)
    except (TypeError, ValueError):
        raise InvalidDirection(f"not a direction: {value!r}") from None
    if vector not in VECTOR_NAMES:
        raise InvalidDirection(f"not a unit move vector: {value!r}")
    return vector


def direction_name(direction):
    return VECTOR_NAMES[to_direction(direction)]


def apply_move(board, direction, dry_run=False, locked=None, stats=None):
    """
    shift every tile at most one cell toward `direction`

    cells are visited starting from the edge the tiles move toward, so the
    leading tile settles before the ones behind it. a tile steps into an
    empty neighbour, or merges with an equal neighbour when neither of them
    was already produced by a merge during this turn.

    args:
        board: Board, mutated in place unless dry_run
        direction: name or (d_row, d_col) vector
        dry_run: only report whether some tile could move, never mutate
        locked: set of coordinates merged earlier in the same turn; a fresh
            set is used when omitted
        stats: optional dict collecting 'points' and 'merges'

    returns:
        changed: True if any tile moved or merged (or could, for a dry run)
    """
    d_row, d_col = to_direction(direction)
    if locked is None:
        locked = set()

    changed = False
    for row, col in board.coordinates((d_row, d_col)):
        value = board.get(row, col)
        if value == 0:
            continue

        dest = (row + d_row, col + d_col)
        if not board.is_valid(*dest):
            continue

        target = board.get(*dest)
        if target == 0:
            if dry_run:
                return True
            board.set(*dest, value)
            board.set(row, col, 0)
            # a merged tile keeps its lock while it keeps sliding
            if (row, col) in locked:
                locked.discard((row, col))
                locked.add(dest)
            changed = True
        elif target == value and dest not in locked and (row, col) not in locked:
            if dry_run:
                return True
            board.set(*dest, value * 2)
            board.set(row, col, 0)
            locked.add(dest)
            if stats is not None:
                stats['points'] = stats.get('points', 0) + value * 2
                stats['merges'] = stats.get('merges', 0) + 1
            changed = True

    return changed


def slide(board, direction):
    """
    apply a move until it reaches a fixed point

    the merge locks live for exactly this one turn

    returns:
        SlideResult(moved, points, merges, passes)
    """
    vector = to_direction(direction)
    locked = set()
    stats = {'points': 0, 'merges': 0}
    passes = 0
    while apply_move(board, vector, locked=locked, stats=stats):
        passes += 1
    locked.clear()
    return SlideResult(passes > 0, stats['points'], stats['merges'], passes)


def can_move(board, direction):
    """check whether a move in `direction` would change the board"""
    return apply_move(board, direction, dry_run=True)
