from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable

from commit_reveal import MIN_SECRET_BYTES, Commitment, RandomSource, SystemRandomSource, create_commitment
from errors import NotYetResolved, SessionStateError
from rules import MoveSet, Outcome, OutcomeMatrix, build_outcome_matrix, resolve


class Status(Enum):
    UNSTARTED = auto()
    COMMITTED = auto()
    RESOLVED = auto()
    REVEALED = auto()
    CLOSED = auto()


@dataclass(frozen=True)
class Reveal:
    secret: str
    move: str


class GameSession:
    """One single-use game against the computer.

    The computer's move is committed at construction and only the tag is
    published. The secret and the move become available once the
    counterparty's move has been submitted and resolved.
    """

    def __init__(
        self,
        move_set: MoveSet,
        random_source: RandomSource | None = None,
        secret_bytes: int = MIN_SECRET_BYTES,
    ) -> None:
        self.move_set = move_set
        self.status = Status.UNSTARTED
        self._commitment: Commitment | None = create_commitment(
            move_set, random_source or SystemRandomSource(), secret_bytes
        )
        self.counterparty_move: str | None = None
        self.outcome: Outcome | None = None
        self.status = Status.COMMITTED

    @classmethod
    def new(
        cls,
        move_names: Iterable[str],
        random_source: RandomSource | None = None,
        secret_bytes: int | None = None,
    ) -> "GameSession":
        return cls(
            MoveSet.from_names(move_names),
            random_source=random_source,
            secret_bytes=secret_bytes if secret_bytes is not None else MIN_SECRET_BYTES,
        )

    # --- Commit ---
    @property
    def commitment_tag(self) -> str:
        return self._live_commitment().tag

    def get_commitment_tag(self) -> str:
        return self.commitment_tag

    # --- Resolve ---
    def submit_counterparty_move(self, name: str) -> Outcome:
        commitment = self._live_commitment()
        if self.status is not Status.COMMITTED:
            raise SessionStateError(f"a move was already submitted (status: {self.status.name.lower()})")

        # UnknownMove propagates before any state changes.
        move = self.move_set.name_of(name)
        outcome = resolve(self.move_set, move, commitment.move)

        self.counterparty_move = move
        self.outcome = outcome
        self.status = Status.RESOLVED
        return outcome

    # --- Reveal ---
    def reveal(self) -> Reveal:
        commitment = self._live_commitment()
        if self.status is Status.COMMITTED:
            raise NotYetResolved("the secret is only revealed after the counterparty's move is resolved")
        self.status = Status.REVEALED
        return Reveal(secret=commitment.secret_hex, move=commitment.move)

    def get_revealed_secret_and_move(self) -> tuple[str, str]:
        revealed = self.reveal()
        return revealed.secret, revealed.move

    # --- Help ---
    def outcome_matrix(self) -> OutcomeMatrix:
        self._live_commitment()
        return build_outcome_matrix(self.move_set)

    def get_outcome_matrix(self) -> OutcomeMatrix:
        return self.outcome_matrix()

    def close(self) -> None:
        self._commitment = None
        self.status = Status.CLOSED

    # --- Internal helpers ---
    def _live_commitment(self) -> Commitment:
        if self.status is Status.CLOSED or self._commitment is None:
            raise SessionStateError("session is closed")
        return self._commitment
