"""
tests for the terminal front end (no real terminal needed)
"""
import io

import pytest

import game_cli
from game import Game2048
from game_config import GameConfig


def scripted(*keys):
    keys = iter(keys)
    return lambda: next(keys)


def single_pair_game(win=8):
    game = Game2048(GameConfig(win=win, seed=0))
    game.board.cells[:, :] = 0
    game.board.cells[0, :] = [4, 4, 0, 0]
    return game


@pytest.mark.parametrize("key, direction", [
    ('h', 'left'), ('j', 'down'), ('k', 'up'), ('l', 'right'),
    ('A', 'left'), ('s', 'down'), ('w', 'up'), ('d', 'right'),
    ('KEY_UP', 'up'), ('KEY_LEFT', 'left'),
])
def test_key_to_direction(key, direction):
    assert game_cli.key_to_direction(key) == direction


@pytest.mark.parametrize("key", ['x', '', ' ', None, '1'])
def test_other_keys_are_not_moves(key):
    assert game_cli.key_to_direction(key) is None


def test_play_until_win(capsys):
    game = single_pair_game()
    outcome = game_cli.play(game, color=False, key_reader=scripted('x', '?', 'h'), clear=False)

    assert outcome == 'won'
    assert game.turns == 1
    out = capsys.readouterr().out
    assert "Unknown key" in out
    assert "Slide the tiles" in out
    assert "you win" in out


def test_play_quit():
    game = Game2048(GameConfig(seed=0))
    assert game_cli.play(game, color=False, key_reader=scripted('q'), clear=False) == 'quit'
    assert game.turns == 0


def test_play_reports_blocked_move(capsys):
    game = single_pair_game(win=2048)
    outcome = game_cli.play(game, color=False, key_reader=scripted('k', 'q'), clear=False)
    assert outcome == 'quit'
    assert "Nothing moves up" in capsys.readouterr().out


def test_render_highlights_new_tile():
    game = single_pair_game()
    game.last_spawn = (0, 1)
    plain = game_cli.render(game, color=False)
    assert "[4]" in plain
    assert "Score: 0" in plain

    colored = game_cli.render(game, color=True)
    assert "\x1b[" in colored


def test_build_config_from_args(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("size: 5\nwin: 256\n", encoding="utf-8")
    args = game_cli.parse_args(['--config', str(path), '--win', '512', '--seed', '3'])
    config = game_cli.build_config(args)
    assert config.size == 5
    assert config.win == 512
    assert config.seed == 3


def test_main_prints_rules(capsys):
    assert game_cli.main(['--rules', '--win', '1024']) == 0
    assert "Reach 1024 to win" in capsys.readouterr().out


def test_main_rejects_bad_config(capsys):
    assert game_cli.main(['--size', '1']) == 2
    assert "Invalid configuration" in capsys.readouterr().err


@pytest.mark.parametrize("text", ["size: [4\n", "size: big\n"])
def test_main_rejects_bad_config_file(tmp_path, capsys, text):
    path = tmp_path / "game.yaml"
    path.write_text(text, encoding="utf-8")
    assert game_cli.main(['--config', str(path), '--rules']) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_read_key_from_piped_input():
    stream = io.StringIO("hq")
    assert game_cli.read_key(stream) == 'h'
    assert game_cli.read_key(stream) == 'q'
    # end of input quits
    assert game_cli.read_key(stream) in game_cli.QUIT_KEYS


def test_play_with_piped_input():
    game = single_pair_game()
    stream = io.StringIO("h")
    outcome = game_cli.play(game, color=False, key_reader=lambda: game_cli.read_key(stream),
                            clear=False)
    assert outcome == 'won'

    game = Game2048(GameConfig(seed=0))
    stream = io.StringIO("\n")
    outcome = game_cli.play(game, color=False, key_reader=lambda: game_cli.read_key(stream),
                            clear=False)
    assert outcome == 'quit'


def test_plain_render_keeps_columns_aligned():
    game = Game2048(GameConfig(win=2048, seed=0))
    game.board.cells[:, :] = 0
    game.board.cells[0, :] = [2048, 2, 0, 0]
    game.board.cells[1, :] = [4, 1024, 0, 0]
    game.last_spawn = (0, 0)
    lines = game_cli.render(game, color=False).splitlines()
    grid = lines[2:6]
    assert "[2048]" in grid[0]
    assert len({len(line) for line in grid}) == 1
    width = len(grid[0]) // 4
    assert grid[0][:width].strip() == "[2048]"
    assert grid[1][:width].strip() == "4"


class FirstCellRng:
    def integers(self, high):
        return 0

    def random(self):
        return 0.5


def test_play_until_loss(capsys):
    game = Game2048(GameConfig(size=2), rng=FirstCellRng())
    game.board.cells[:, :] = [[4, 8], [0, 16]]
    game.last_spawn = None

    outcome = game_cli.play(game, color=False, key_reader=scripted('h'), clear=False)

    assert outcome == 'lost'
    assert game.board.to_list() == [[4, 8], [16, 2]]
    assert "No moves left" in capsys.readouterr().out
