"""
game session: owns the board, the random source and the counters
"""
import logging

import numpy as np

from game_board import Board
from game_config import GameConfig
from game_moves import slide, direction_name
from game_rules import has_winning_tile, is_lost, available_directions
from game_spawn import spawn_tile, random_tile_value

logger = logging.getLogger(__name__)


class Game2048:
    def __init__(self, config=None, rng=None):
        """
        initialize a game

        args:
            config: GameConfig, defaults to a 4x4 board with base 2 / win 2048
            rng: numpy Generator used for every spawn; built from config.seed
                when omitted
        """
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.reset()

    @property
    def size(self):
        return self.config.size

    def reset(self, rng=None):
        """start over with a fresh board and seeded tiles"""
        if rng is not None:
            self.rng = rng
        self.board = Board(self.config.size)
        self.score = 0
        self.turns = 0
        self.won = False
        self.lost = False
        self.game_over = False
        self.last_spawn = None

        # starting tiles may go anywhere, there is nothing to be adjacent to yet
        for _ in range(self.config.start_tiles):
            spawn_tile(self.board, self.rng, self.config.base, policy='anywhere')
        logger.debug("new %dx%d game, start tiles at %s", self.size, self.size,
                     self.board.nonempty_coordinates())

    def add_random_tile(self):
        """spawn one tile according to the configured policy"""
        value = random_tile_value(self.rng, self.config.base, self.config.double_probability)
        coord = spawn_tile(self.board, self.rng, value, policy=self.config.spawn_policy)
        self.last_spawn = coord
        if coord is not None:
            logger.debug("spawned %d at %s", value, coord)
        return coord

    def make_move(self, direction):
        """
        play one turn in the given direction

        slides to a fixed point, then spawns a tile and checks for a
        win or a loss if anything changed

        returns:
            (moved, points) where points is the sum of merged tile values
        """
        if self.game_over:
            return False, 0

        result = slide(self.board, direction)
        if not result.moved:
            logger.debug("%s changed nothing", direction_name(direction))
            return False, 0

        self.turns += 1
        self.score += result.points
        logger.debug("turn %d: %s, %d merges, +%d points", self.turns,
                     direction_name(direction), result.merges, result.points)

        self.add_random_tile()
        self.check_state()
        return True, result.points

    def check_state(self):
        """update won / lost / game_over from the board"""
        if has_winning_tile(self.board, self.config.win):
            self.won = True
            self.game_over = True
            logger.info("reached %d after %d turns", self.config.win, self.turns)
        elif is_lost(self.board, self.config.win):
            self.lost = True
            self.game_over = True
            logger.info("no moves left after %d turns, score %d", self.turns, self.score)
        return self.game_over

    def is_game_over(self):
        return self.game_over

    def available_moves(self):
        """directions that would change the board"""
        return available_directions(self.board)

    @property
    def tile_sum(self):
        return self.board.total()

    @property
    def max_tile(self):
        return self.board.max_tile()

    def render_text(self, cell_width=None):
        """plain text grid"""
        if cell_width is None:
            cell_width = max(4, len(str(self.config.win)))
        border = "+" + ("-" * cell_width + "+") * self.size
        lines = [border]
        for row in self.board.to_list():
            cells = [(str(v) if v else "").center(cell_width) for v in row]
            lines.append("|" + "|".join(cells) + "|")
            lines.append(border)
        return "\n".join(lines)

    def print_board(self):
        """print the board to console"""
        print(f"Score: {self.score}  Turn: {self.turns}")
        print(self.render_text())
        if self.won:
            print("YOU WIN!")
        elif self.lost:
            print("GAME OVER!")
        print()
