from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, Literal

from errors import InvalidMoveSet, UnknownMove

Outcome = Literal["win", "lose", "draw"]
MoveRef = str | int

MIN_MOVES = 3


@dataclass(frozen=True)
class MoveSet:
    moves: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.moves) < MIN_MOVES:
            raise InvalidMoveSet(f"at least {MIN_MOVES} moves are required, got {len(self.moves)}")
        if len(self.moves) % 2 == 0:
            raise InvalidMoveSet(f"the number of moves must be odd, got {len(self.moves)}")
        if len(set(self.moves)) != len(self.moves):
            dupes = sorted(m for m, count in Counter(self.moves).items() if count > 1)
            raise InvalidMoveSet("moves must be unique, duplicated: " + ", ".join(dupes))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "MoveSet":
        return cls(tuple(names))

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[str]:
        return iter(self.moves)

    def __contains__(self, move: object) -> bool:
        return move in self.moves

    def index_of(self, move: MoveRef) -> int:
        # bool is an int subclass; True/False are never valid move references.
        if isinstance(move, int) and not isinstance(move, bool):
            if 0 <= move < len(self.moves):
                return move
            raise UnknownMove(move)
        try:
            return self.moves.index(move)
        except ValueError:
            raise UnknownMove(move) from None

    def name_of(self, move: MoveRef) -> str:
        return self.moves[self.index_of(move)]


@dataclass(frozen=True)
class OutcomeMatrix:
    """Outcome of every ordered pair; rows are the subject move, columns the other move."""

    moves: tuple[str, ...]
    rows: tuple[tuple[Outcome, ...], ...]

    def cell(self, subject: str, other: str) -> Outcome:
        return self.rows[self.moves.index(subject)][self.moves.index(other)]


def resolve(move_set: MoveSet, subject: MoveRef, other: MoveRef) -> Outcome:
    """Outcome for `subject` played against `other`.

    The moves sit on a cycle of N positions. Each move beats the N // 2 moves
    before it and loses to the N // 2 moves after it, so `delta` is the signed
    rotational distance from subject to other, folded into [-half, +half].
    """
    n = len(move_set)
    half = n // 2
    a = move_set.index_of(subject)
    b = move_set.index_of(other)
    delta = ((b - a + half + n) % n) - half
    if delta == 0:
        return "draw"
    return "win" if delta < 0 else "lose"


def invert(outcome: Outcome) -> Outcome:
    if outcome == "win":
        return "lose"
    if outcome == "lose":
        return "win"
    return "draw"


def build_outcome_matrix(move_set: MoveSet) -> OutcomeMatrix:
    n = len(move_set)
    rows = tuple(tuple(resolve(move_set, i, j) for j in range(n)) for i in range(n))
    return OutcomeMatrix(moves=move_set.moves, rows=rows)
