"""
board state for 2048: a square grid of tile values
"""
import numpy as np


class OutOfRange(IndexError):
    """raised when a coordinate falls outside the board"""

    def __init__(self, row, col, size):
        super().__init__(f"cell ({row}, {col}) is outside a {size}x{size} board")
        self.row = row
        self.col = col
        self.size = size


# orthogonal neighbour offsets as (row, col)
NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Board:
    def __init__(self, size=4):
        """initialize an empty size x size board"""
        if size < 1:
            raise ValueError(f"board size must be positive, got {size}")
        self._size = int(size)
        # row-major storage, 0 means empty
        self.cells = np.zeros((self._size, self._size), dtype=np.int64)

    @classmethod
    def from_rows(cls, rows):
        """build a board from a square list of rows"""
        grid = np.array(rows, dtype=np.int64)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"rows must form a square grid, got shape {grid.shape}")
        board = cls(grid.shape[0])
        board.cells[:, :] = grid
        return board

    @property
    def size(self):
        return self._size

    def is_valid(self, row, col):
        """check if (row, col) is on the board"""
        return 0 <= row < self._size and 0 <= col < self._size

    def _check(self, row, col):
        # numpy would silently wrap negative indices
        if not self.is_valid(row, col):
            raise OutOfRange(row, col, self._size)

    def get(self, row, col):
        self._check(row, col)
        return int(self.cells[row, col])

    def set(self, row, col, value):
        self._check(row, col)
        self.cells[row, col] = value

    def __getitem__(self, coord):
        return self.get(*coord)

    def __setitem__(self, coord, value):
        self.set(*coord, value)

    def coordinates(self, direction=None):
        """
        list every coordinate once, ordered for a traversal in `direction`

        cells closest to the edge the tiles are moving toward come first:
        rows run bottom-up for a downward move and columns right-to-left
        for a rightward move. with no direction the order is row-major.

        args:
            direction: (d_row, d_col) vector or None
        """
        d_row, d_col = direction if direction is not None else (0, 0)
        rows = range(self._size - 1, -1, -1) if d_row > 0 else range(self._size)
        cols = range(self._size - 1, -1, -1) if d_col > 0 else range(self._size)
        return [(row, col) for row in rows for col in cols]

    def empty_coordinates(self, candidates=None):
        """filter candidates (default: the whole board) down to empty cells"""
        if candidates is None:
            candidates = self.coordinates()
        return [coord for coord in candidates if self.get(*coord) == 0]

    def nonempty_coordinates(self, candidates=None):
        """filter candidates (default: the whole board) down to occupied cells"""
        if candidates is None:
            candidates = self.coordinates()
        return [coord for coord in candidates if self.get(*coord) != 0]

    def adjacent(self, coord):
        """on-board orthogonal neighbours of coord"""
        row, col = coord
        neighbours = []
        for d_row, d_col in NEIGHBOUR_OFFSETS:
            if self.is_valid(row + d_row, col + d_col):
                neighbours.append((row + d_row, col + d_col))
        return neighbours

    def adjacent_to_nonempty(self):
        """distinct cells that touch at least one occupied cell, row-major"""
        touching = set()
        for coord in self.nonempty_coordinates():
            touching.update(self.adjacent(coord))
        return sorted(touching)

    def is_empty(self):
        return not self.cells.any()

    def is_full(self):
        return bool(self.cells.all())

    def total(self):
        """sum of all tile values"""
        return int(self.cells.sum())

    def max_tile(self):
        return int(self.cells.max())

    def tile_count(self):
        return int(np.count_nonzero(self.cells))

    def copy(self):
        clone = Board(self._size)
        clone.cells[:, :] = self.cells
        return clone

    def to_list(self):
        return self.cells.tolist()

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and np.array_equal(self.cells, other.cells)

    __hash__ = None

    def __repr__(self):
        return f"Board(size={self._size}, rows={self.to_list()})"
