"""
terminal front end: single-key input, text rendering, game loop
"""
import argparse
import logging
import os
import sys

from colorama import Fore, Style, just_fix_windows_console

from game import Game2048
from game_config import GameConfig
from game_spawn import SPAWN_POLICIES

logger = logging.getLogger(__name__)


# key -> direction name, vi keys first
KEY_BINDINGS = {
    'h': 'left', 'j': 'down', 'k': 'up', 'l': 'right',
    'a': 'left', 's': 'down', 'w': 'up', 'd': 'right',
    # escape sequences / windows scan codes are mapped by read_key
    'KEY_LEFT': 'left', 'KEY_DOWN': 'down', 'KEY_UP': 'up', 'KEY_RIGHT': 'right',
}

QUIT_KEYS = ('q', '\x03', '\x04')
HELP_KEYS = ('?',)

ANSI_ARROWS = {'A': 'KEY_UP', 'B': 'KEY_DOWN', 'C': 'KEY_RIGHT', 'D': 'KEY_LEFT'}
WINDOWS_ARROWS = {72: 'KEY_UP', 80: 'KEY_DOWN', 77: 'KEY_RIGHT', 75: 'KEY_LEFT'}

TILE_COLORS = {
    2: Fore.WHITE,
    4: Fore.WHITE + Style.BRIGHT,
    8: Fore.YELLOW,
    16: Fore.YELLOW + Style.BRIGHT,
    32: Fore.RED,
    64: Fore.RED + Style.BRIGHT,
    128: Fore.MAGENTA,
    256: Fore.MAGENTA + Style.BRIGHT,
    512: Fore.CYAN,
    1024: Fore.CYAN + Style.BRIGHT,
    2048: Fore.GREEN + Style.BRIGHT,
}

RULES = """\
Slide the tiles with h/j/k/l, w/a/s/d or the arrow keys.
Two tiles with the same number merge into one when they touch,
but a tile made by a merge does not merge again in the same turn.
A new tile appears after every move that changed the board.
Reach {win} to win; the game is lost when the board is stuck.
Press ? for this help, q to quit."""


def _read_key_windows():
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ('\x00', '\xe0'):
        return WINDOWS_ARROWS.get(ord(msvcrt.getwch()))
    return ch


def _read_key_stream(stream):
    ch = stream.read(1)
    # end of input counts as quitting
    return ch if ch else '\x04'


def _read_key_posix():
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        ch = sys.stdin.read(1)
        if ch == '\x1b':
            # arrow keys arrive as ESC [ A..D
            if sys.stdin.read(1) == '[':
                return ANSI_ARROWS.get(sys.stdin.read(1))
            return None
        return ch
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def read_key(stream=None):
    """
    block until one key is pressed and return it

    piped or redirected input is read one character at a time without
    touching terminal modes
    """
    if stream is None:
        stream = sys.stdin
    if not stream.isatty():
        return _read_key_stream(stream)
    if os.name == 'nt':
        return _read_key_windows()
    return _read_key_posix()


def key_to_direction(key):
    """direction name for a key, or None when the key is not a move"""
    if key is None:
        return None
    return KEY_BINDINGS.get(key if key.startswith('KEY_') else key.lower())


def format_cell(value, width, highlight=False, color=True):
    text = (str(value) if value else ".").rjust(width)
    if not color:
        if highlight and value:
            return f"[{value}]".rjust(width)
        return text
    if highlight:
        return Style.BRIGHT + Fore.BLACK + "\x1b[47m" + text + Style.RESET_ALL
    if value:
        return TILE_COLORS.get(value, Fore.GREEN + Style.BRIGHT) + text + Style.RESET_ALL
    return Style.DIM + text + Style.RESET_ALL


def render(game, color=True):
    """
    text view of the game: header line plus the grid, with the tile spawned
    on the last turn highlighted
    """
    # room for a bracketed tile of the win value plus a separating space
    width = len(str(game.config.win)) + 3
    lines = [f"Score: {game.score}   Sum: {game.tile_sum}   Turn: {game.turns}", ""]
    for row, values in enumerate(game.board.to_list()):
        cells = [format_cell(v, width, (row, col) == game.last_spawn, color)
                 for col, v in enumerate(values)]
        lines.append("".join(cells))
    lines.append("")
    return "\n".join(lines)


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def play(game, color=True, key_reader=read_key, clear=True):
    """
    run the interactive loop until the game ends or the player quits

    returns:
        'won', 'lost' or 'quit'
    """
    message = "Press ? for help"
    while True:
        if clear:
            clear_screen()
        print(render(game, color))
        if game.won:
            print(f"You reached {game.config.win}, you win!")
            return 'won'
        if game.lost:
            print("No moves left. Game over!")
            return 'lost'
        print(message)

        key = key_reader()
        if key in QUIT_KEYS:
            logger.info("player quit after %d turns", game.turns)
            return 'quit'
        if key in HELP_KEYS:
            message = RULES.format(win=game.config.win)
            continue

        direction = key_to_direction(key)
        if direction is None:
            message = "Unknown key, press ? for help"
            continue

        moved, points = game.make_move(direction)
        if not moved:
            message = f"Nothing moves {direction}"
        elif points:
            message = f"{direction}: +{points}"
        else:
            message = direction


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='term2048', description="Play 2048 in the terminal")
    parser.add_argument('--config', help="yaml file with game settings")
    parser.add_argument('--size', type=int, help="board size (default 4)")
    parser.add_argument('--base', type=int, help="value of spawned tiles (default 2)")
    parser.add_argument('--win', type=int, help="tile value that wins (default 2048)")
    parser.add_argument('--spawn-policy', choices=SPAWN_POLICIES,
                        help="where new tiles may appear")
    parser.add_argument('--start-tiles', type=int, help="tiles on the starting board")
    parser.add_argument('--seed', type=int, help="random seed")
    parser.add_argument('--no-color', action='store_true', help="plain output")
    parser.add_argument('--log-file', help="write a debug log to this file")
    parser.add_argument('--rules', action='store_true', help="print the rules and exit")
    return parser.parse_args(argv)


def build_config(args):
    """config file first, command line options on top"""
    config = GameConfig.from_yaml(args.config) if args.config else GameConfig()
    return config.replace(
        size=args.size,
        base=args.base,
        win=args.win,
        spawn_policy=args.spawn_policy,
        start_tiles=args.start_tiles,
        seed=args.seed,
    )


def log_setup(log_file):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )


def main(argv=None):
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.rules:
        print(RULES.format(win=config.win))
        return 0

    if args.log_file:
        log_setup(args.log_file)

    color = not args.no_color
    if color:
        just_fix_windows_console()

    game = Game2048(config)
    try:
        outcome = play(game, color=color)
    except KeyboardInterrupt:
        outcome = 'quit'
    print(f"Final score: {game.score} in {game.turns} turns (max tile {game.max_tile})")
    logger.info("game ended: %s", outcome)
    return 0


if __name__ == "__main__":
    sys.exit(main())
