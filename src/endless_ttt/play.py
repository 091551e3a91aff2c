"""
One scheduled run of the match: load, play one move, evaluate, save, report.

Nothing is written until the move and the evaluation have succeeded, so a
failing run leaves the previous record authoritative.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .engine import State
from .errors import MatchError
from .match import Match
from .opening import position_from_token
from .paths import get_git_commit, report_file, state_file
from .policy import Difficulty, Opponent
from .state import write_text_atomic


@dataclass
class PlayArgs:
    state: Optional[Path] = None
    report: Optional[Path] = None
    token: Optional[str] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    seed: Optional[int] = None


def run_play(args: PlayArgs) -> State:
    state_path = args.state if args.state is not None else state_file()
    report_path = args.report if args.report is not None else report_file()

    match = Match.load(state_path, opponent=Opponent(args.difficulty, seed=args.seed))
    if match.is_new_game():
        token = args.token if args.token is not None else get_git_commit()
        if token is None:
            raise MatchError("A new game needs an opening token and no git commit is available")
        try:
            opening = position_from_token(token)
        except ValueError as e:
            raise MatchError(str(e)) from e
        logging.info("Opening from token %s", token)
        match.do_move(opening)
    else:
        match.ai_move()

    outcome = match.evaluate_state()
    report = match.to_markdown()
    match.save(state_path)
    write_text_atomic(report_path, report)
    logging.info("Wrote report to %s", report_path)
    return outcome
