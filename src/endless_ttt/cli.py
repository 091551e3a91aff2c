from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .engine import Player
from .errors import MatchError
from .match import Match
from .paths import state_file
from .play import PlayArgs, run_play
from .policy import Difficulty
from .solver import solve_state
from .state import MatchState, save_state


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ettt", description="Endless tic-tac-toe match")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the automated opponent")

    p_play = sub.add_parser("play", help="Play one move, evaluate, save and rewrite the report")
    p_play.add_argument(
        "--token",
        help="Hex token (e.g. a commit hash) used for the opening move; defaults to git HEAD",
    )
    p_play.add_argument("--state", type=Path, default=None, help="Match state file")
    p_play.add_argument("--report", type=Path, default=None, help="Markdown report file")
    p_play.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Opponent difficulty (default: medium)",
    )

    p_init = sub.add_parser("init", help="Write a fresh match state")
    p_init.add_argument("--state", type=Path, default=None, help="Match state file")
    p_init.add_argument(
        "--start",
        choices=[p.value for p in Player],
        default=Player.X.value,
        help="Player who starts the first game",
    )
    p_init.add_argument("--force", action="store_true", help="Overwrite an existing state file")

    p_show = sub.add_parser("show", help="Print the report for the current state")
    p_show.add_argument("--state", type=Path, default=None, help="Match state file")

    p_hint = sub.add_parser("hint", help="Show perfect-play moves for the side to move")
    p_hint.add_argument("--state", type=Path, default=None, help="Match state file")

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("endless-ttt"))
        except Exception:
            print("unknown")
        return 0

    try:
        if ns.cmd == "play":
            outcome = run_play(PlayArgs(
                state=ns.state,
                report=ns.report,
                token=ns.token,
                difficulty=Difficulty(ns.difficulty),
                seed=ns.seed,
            ))
            logging.info("state=%s", outcome.value)
            return 0

        if ns.cmd == "init":
            path = ns.state if ns.state is not None else state_file()
            if path.exists() and not ns.force:
                logging.error("State file already exists: %s (use --force to overwrite)", path)
                return 2
            start = Player(ns.start)
            save_state(MatchState(start_player=start, current_player=start), path)
            logging.info("Wrote fresh match state to %s", path)
            return 0

        if ns.cmd == "show":
            match = Match.load(ns.state if ns.state is not None else state_file())
            print(match.to_markdown())
            return 0

        if ns.cmd == "hint":
            match = Match.load(ns.state if ns.state is not None else state_file())
            mover = match.game.state().player_to_move()
            if mover is None:
                logging.error("The game is over; nothing to hint")
                return 2
            res = solve_state(tuple(match.game.cells()), mover.code)
            logging.info(
                "to_move=%s value=%s plies=%s optimal=%s",
                mover,
                res['value'],
                res['plies_to_end'],
                [divmod(i, 3) for i in res['optimal_moves']],
            )
            return 0
    except MatchError as e:
        logging.error("%s: %s", type(e).__name__, e)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
