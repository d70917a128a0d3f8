"""Module entrypoint for `python -m hex_roots`."""

if __package__ is None or __package__ == "":
    import sys
    from pathlib import Path

    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
import logging

from hex_roots.board import Board
from hex_roots.boards import generate
from hex_roots.config import DEFAULT_BOARD_HEIGHT, DEFAULT_BOARD_WIDTH, DEFAULT_SEED
from hex_roots.errors import HexRootsError
from hex_roots.runtime import configure_logging

logger = logging.getLogger("hex_roots.cli")


def render_text(board):
    """Group index per tile, one line per row; ``*`` marks unlocked, ``$`` stone tiles."""

    cell_width = max(3, len(str(max(board.grid.groups(), default=0))) + 2)
    lines = [
        f"seed={board.seed!r} size={board.width}x{board.height} "
        f"stones={board.n_stones} pieces={board.n_stone_pieces}/{board.n_stone_pieces_per_stone}"
    ]
    for r in range(board.height):
        cells = []
        for q in range(board.width):
            tile = board.grid.tile_at(q, r)
            if tile.is_blank:
                label = "."
            else:
                label = str(tile.group_index)
                if tile.is_stone_tile:
                    label += "$"
                if tile.unlocked:
                    label += "*"
            cells.append(label.rjust(cell_width))
        lines.append("".join(cells))
    return "\n".join(lines)


def _cmd_generate(args):
    board = generate(args.seed, args.width, args.height)
    if args.out:
        path = board.save(args.out)
        logger.info("Saved board to %s", path)
    else:
        print(board.to_json(indent=2))
    return 0


def _cmd_show(args):
    print(render_text(Board.load(args.board)))
    return 0


def _cmd_unlock(args):
    board = Board.load(args.board)
    board.add_listener(lambda changed: changed.save(args.board))
    if board.try_activate(args.tile_ids):
        print(f"unlocked; stones={board.n_stones} pieces={board.n_stone_pieces}")
        return 0
    print("rejected")
    return 1


def build_parser():
    parser = argparse.ArgumentParser(prog="hex_roots", description="Generate and play hex grouping boards.")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    commands = parser.add_subparsers(dest="command", required=True)

    gen = commands.add_parser("generate", help="Generate a new board")
    gen.add_argument("--seed", default=DEFAULT_SEED)
    gen.add_argument("--width", type=int, default=DEFAULT_BOARD_WIDTH)
    gen.add_argument("--height", type=int, default=DEFAULT_BOARD_HEIGHT)
    gen.add_argument("--out", default=None, help="Write the board JSON here instead of stdout")
    gen.set_defaults(handler=_cmd_generate)

    show = commands.add_parser("show", help="Print a saved board as text")
    show.add_argument("board")
    show.set_defaults(handler=_cmd_show)

    unlock = commands.add_parser("unlock", help="Try to unlock tiles on a saved board")
    unlock.add_argument("board")
    unlock.add_argument("tile_ids", type=int, nargs="+")
    unlock.set_defaults(handler=_cmd_unlock)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        return args.handler(args)
    except (HexRootsError, OSError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
