import gymnasium as gym
from gymnasium import spaces
import numpy as np

from game import Game2048
from game_config import GameConfig
from game_moves import InvalidDirection, slide


class Game2048Env(gym.Env):
    """
    gymnasium environment for 2048 game

    wraps a Game2048 session; the environment's np_random is handed to the
    session so seeding through reset(seed=...) makes spawns reproducible
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, config=None, render_mode=None):
        super().__init__()

        self.config = config if config is not None else GameConfig()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render mode {render_mode!r}")
        self.render_mode = render_mode

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # raw tile values, the cap only bounds the space
        size = self.config.size
        self.observation_space = spaces.Box(
            low=0,
            high=2 ** 30,
            shape=(size, size),
            dtype=np.int64
        )

        # map actions to game directions
        self.action_to_direction = {
            0: 'up',
            1: 'down',
            2: 'left',
            3: 'right'
        }

        self.game = None
        self.last_afterstate = None

    def _get_observation(self):
        return self.game.board.cells.copy()

    def _direction(self, action):
        try:
            return self.action_to_direction[int(action)]
        except (KeyError, TypeError, ValueError):
            raise InvalidDirection(f"action must be 0-3, got {action!r}") from None

    def get_afterstate(self, action):
        """
        get the afterstate: board after move but before random tile

        the live game is left untouched

        returns:
            afterstate_board: board after the move, or None if nothing moved
            reward: points earned from merging
            valid: if the move was valid
        """
        board = self.game.board.copy()
        result = slide(board, self._direction(action))
        if not result.moved:
            return None, 0, False
        return board.cells.copy(), result.points, True

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        if self.game is None:
            self.game = Game2048(self.config, rng=self.np_random)
        else:
            self.game.reset(rng=self.np_random)
        self.last_afterstate = None

        observation = self._get_observation()
        info = {"score": self.game.score}

        if self.render_mode == "human":
            self.render()
        return observation, info

    def step(self, action):
        """take one step in the environment"""
        if self.game is None:
            raise RuntimeError("call reset() before step()")

        direction = self._direction(action)
        afterstate_board, _, valid = self.get_afterstate(action)

        # the move itself (spawns a tile when something changed)
        moved, points = self.game.make_move(direction)

        # reward is the points earned from merges
        reward = float(points) if moved else 0.0

        observation = self._get_observation()
        terminated = self.game.game_over
        truncated = False

        valid = valid and moved
        if valid:
            self.last_afterstate = afterstate_board

        info = {
            "score": self.game.score,
            "moved": moved,
            "points_gained": points,
            "afterstate": afterstate_board if valid else None,
            "max_tile": self.game.max_tile,
            "turns": self.game.turns,
            "won": self.game.won,
        }

        if self.render_mode == "human":
            self.render()
        return observation, reward, terminated, truncated, info

    def render(self):
        """display the game state"""
        if self.render_mode == "ansi":
            return self.game.render_text()
        if self.render_mode == "human":
            self.game.print_board()
        return None

    def close(self):
        """clean up resources"""
        self.game = None
