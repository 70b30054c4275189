from __future__ import annotations

import argparse
import logging
import os
from typing import Callable, Mapping, TypeVar

from commit_reveal import verify_commitment
from errors import InvalidMoveSet
from help_table import format_table
from rules import MoveSet, Outcome, build_outcome_matrix
from session import GameSession
from settings import load_log_level, load_secret_bytes

log = logging.getLogger(__name__)

_RESULT_TEXT: dict[Outcome, str] = {"win": "You win!", "lose": "You lose!", "draw": "Draw"}

T = TypeVar("T")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps", description="Provably fair N-move rock-paper-scissors")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level (default: RPS_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one round against the computer")
    play.add_argument("moves", nargs="*", help="Odd number (>= 3) of unique move names, in cycle order")

    table = sub.add_parser("table", help="Print the outcome table for a move set")
    table.add_argument("moves", nargs="*")

    verify = sub.add_parser("verify", help="Check a revealed HMAC key against the published HMAC")
    verify.add_argument("--key", required=True, help="HMAC key shown after the round (hex)")
    verify.add_argument("--move", required=True, help="Computer move shown after the round")
    verify.add_argument("--hmac", required=True, help="HMAC published before the round")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level or _from_env(load_log_level))

    if args.cmd == "verify":
        ok = verify_commitment(expected_tag=args.hmac, secret=args.key, move=args.move)
        print("OK" if ok else "MISMATCH")
        return 0 if ok else 1

    move_set = _parse_moves(args.moves)

    if args.cmd == "table":
        print(format_table(build_outcome_matrix(move_set)))
        return 0

    if args.cmd == "play":
        session = GameSession(move_set, secret_bytes=_from_env(load_secret_bytes))
        log.debug("session committed with %d moves", len(move_set))
        try:
            return _play(session)
        finally:
            session.close()
            log.debug("session closed")

    raise SystemExit("unhandled command")


def _from_env(loader: Callable[[Mapping[str, str]], T]) -> T:
    try:
        return loader(os.environ)
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}") from exc


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_moves(names: list[str]) -> MoveSet:
    try:
        return MoveSet.from_names(names)
    except InvalidMoveSet as exc:
        raise SystemExit(
            f"Error: {exc}\n"
            "Usage: rps {play,table} MOVE MOVE MOVE [MOVE MOVE ...]  (e.g. rps play Rock Paper Scissors)"
        ) from exc


def _play(session: GameSession) -> int:
    print(f"HMAC: {session.commitment_tag}")
    _show_menu(session.move_set)
    while True:
        try:
            choice = input().strip()
        except EOFError:
            choice = "0"

        if choice == "?":
            print(format_table(session.outcome_matrix()))
            continue
        if choice == "0":
            print("Exiting the game...")
            return 0
        if choice.isdecimal() and 1 <= int(choice) <= len(session.move_set):
            user_move = session.move_set.name_of(int(choice) - 1)
            _show_results(session, user_move)
            return 0

        print("Invalid input, please try again.")
        _show_menu(session.move_set)


def _show_menu(move_set: MoveSet) -> None:
    print("Available moves:")
    for index, move in enumerate(move_set, start=1):
        print(f"{index} - {move}")
    print("0 - exit")
    print("? - help")
    print("Enter your move:")


def _show_results(session: GameSession, user_move: str) -> None:
    outcome = session.submit_counterparty_move(user_move)
    revealed = session.reveal()
    log.debug("round resolved: %s", outcome)
    print(f"Your move: {user_move}")
    print(f"Computer move: {revealed.move}")
    print(_RESULT_TEXT[outcome])
    print(f"HMAC key: {revealed.secret}")
    print("Finish")


if __name__ == "__main__":
    raise SystemExit(main())
