"""Terminal entry point: play against the engine or watch it play itself."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Callable

from chessweb.core.enums import Color
from chessweb.core.types import algebraic_to_square
from chessweb.engine.minimax import MinimaxEngine
from chessweb.engine.search import Difficulty
from chessweb.game.controller import GameController

_LOGGER = logging.getLogger(__name__)
_QUIT_WORDS = frozenset({"quit", "exit", "resign"})


def _parse_log_level(name: str | None) -> int:
    name = (name or "WARNING").upper()
    return getattr(logging, name, logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessweb",
        description="Play chess against a minimax engine in the terminal.",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
    )
    parser.add_argument(
        "--color",
        choices=["white", "black"],
        default="white",
        help="side the human plays",
    )
    parser.add_argument(
        "--self-play",
        action="store_true",
        help="let the engine play both sides",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed easy-mode randomness")
    parser.add_argument("--max-plies", type=int, default=200)
    parser.add_argument("--log-level", default="WARNING")
    return parser


def _print_position(controller: GameController, out: Callable[[str], None]) -> None:
    state = controller.state
    out(repr(state.board))
    if state.last_move is not None:
        out(f"last move: {state.last_move}")
    out(f"{state.side_to_move} to move ({state.status.value})")


def _announce_result(controller: GameController, out: Callable[[str], None]) -> None:
    state = controller.state
    if state.winner is not None:
        out(f"{state.status.value}: {state.winner} wins")
    elif state.is_game_over:
        out(f"game ended: {state.status.value}")
    else:
        out(f"stopped after {state.ply_count} plies")
    out(" ".join(state.move_history_display()))


def run_self_play(
    difficulty: Difficulty,
    max_plies: int,
    rng: random.Random,
    out: Callable[[str], None] = print,
) -> GameController:
    engine = MinimaxEngine(rng=rng)
    controller = GameController(engine, auto_reply=False)
    controller.new_game(difficulty=difficulty, self_play=True)

    while controller.state.ply_count < max_plies and not controller.state.is_game_over:
        mover = controller.state.side_to_move
        move = controller.play_engine_move()
        if move is None:
            break
        out(f"{mover}: {move}")

    _print_position(controller, out)
    _announce_result(controller, out)
    return controller


def run_interactive(
    human: Color,
    difficulty: Difficulty,
    rng: random.Random,
    read: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> GameController:
    controller = GameController(MinimaxEngine(rng=rng))
    controller.new_game(engine_color=human.opposite, difficulty=difficulty)

    while not controller.state.is_game_over:
        _print_position(controller, out)
        try:
            text = read("your move (e.g. e2e4, 'undo', 'quit'): ").strip().lower()
        except EOFError:
            break
        if text in _QUIT_WORDS:
            break
        if text == "undo":
            if not controller.undo_move():
                out("nothing to undo")
            continue
        try:
            from_sq = algebraic_to_square(text[:2])
            to_sq = algebraic_to_square(text[2:4])
        except ValueError:
            out(f"cannot read move {text!r}")
            continue
        if len(text) != 4 or not controller.submit_move(from_sq, to_sq):
            out(f"illegal move {text!r}")

    if controller.state.is_game_over:
        _print_position(controller, out)
        _announce_result(controller, out)
    return controller


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=_parse_log_level(args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    difficulty = Difficulty.parse(args.difficulty)
    rng = random.Random(args.seed)
    _LOGGER.debug("starting: %s", vars(args))

    if args.self_play:
        run_self_play(difficulty, args.max_plies, rng)
    else:
        human = Color.WHITE if args.color == "white" else Color.BLACK
        run_interactive(human, difficulty, rng)
    return 0


if __name__ == "__main__":
    sys.exit(main())
