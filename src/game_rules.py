"""
win / lose detection
"""
from game_moves import DIRECTIONS, apply_move


def has_winning_tile(board, win_value=2048):
    """check if any cell holds the win value"""
    return bool((board.cells == win_value).any())


def any_move_available(board, directions=None):
    """check if a dry run succeeds in at least one direction"""
    if directions is None:
        directions = DIRECTIONS.values()
    for direction in directions:
        if apply_move(board, direction, dry_run=True):
            return True
    return False


def available_directions(board):
    """names of the directions that would change the board"""
    return [name for name, vector in DIRECTIONS.items()
            if apply_move(board, vector, dry_run=True)]


def is_lost(board, win_value=2048):
    """
    check the lose condition

    not won, nothing can move, and the board already holds at least one
    tile (an empty board has not started yet)
    """
    if has_winning_tile(board, win_value):
        return False
    if board.is_empty():
        return False
    return not any_move_available(board)
