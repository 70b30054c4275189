from __future__ import annotations

import pytest

from commit_reveal import compute_tag, verify_commitment  # type: ignore[import-not-found]
from errors import InvalidMoveSet, NotYetResolved, SessionStateError, UnknownMove  # type: ignore[import-not-found]
from session import GameSession, Reveal, Status  # type: ignore[import-not-found]

CLASSIC = ["Rock", "Paper", "Scissors"]


@pytest.fixture
def session(fixed_source) -> GameSession:
    # Computer plays "Scissors".
    fixed_source.index = 2
    return GameSession.new(CLASSIC, random_source=fixed_source)


def test_new_session_is_committed(session: GameSession) -> None:
    assert session.status is Status.COMMITTED
    assert session.outcome is None
    assert session.counterparty_move is None


@pytest.mark.parametrize("names", [["a", "b"], ["a", "a", "b"], [], ["a", "b", "c", "d"]])
def test_new_session_rejects_invalid_move_sets(names: list[str]) -> None:
    with pytest.raises(InvalidMoveSet):
        GameSession.new(names)


def test_new_session_accepts_valid_move_set() -> None:
    assert GameSession.new(["a", "b", "c"]).status is Status.COMMITTED


def test_commitment_tag_is_published_immediately(session: GameSession, fixed_source) -> None:
    expected = compute_tag(fixed_source.secure_bytes(32), "Scissors")
    assert session.commitment_tag == expected
    assert session.get_commitment_tag() == expected
    assert len(expected) == 64


def test_reveal_before_resolution_fails(session: GameSession) -> None:
    with pytest.raises(NotYetResolved):
        session.reveal()
    with pytest.raises(NotYetResolved):
        session.get_revealed_secret_and_move()
    assert session.status is Status.COMMITTED


def test_unknown_move_keeps_session_committed(session: GameSession) -> None:
    with pytest.raises(UnknownMove):
        session.submit_counterparty_move("Unknown")
    assert session.status is Status.COMMITTED
    assert session.outcome is None

    # Recoverable: the caller may retry with a valid move.
    assert session.submit_counterparty_move("Rock") == "win"
    assert session.status is Status.RESOLVED


@pytest.mark.parametrize("move, expected", [("Rock", "win"), ("Paper", "lose"), ("Scissors", "draw")])
def test_counterparty_is_the_subject(session: GameSession, move: str, expected: str) -> None:
    assert session.submit_counterparty_move(move) == expected
    assert session.counterparty_move == move
    assert session.outcome == expected


def test_full_round_reveal_verifies(session: GameSession) -> None:
    tag = session.commitment_tag
    session.submit_counterparty_move("Paper")

    revealed = session.reveal()
    assert isinstance(revealed, Reveal)
    assert revealed.move == "Scissors"
    assert len(revealed.secret) == 64
    assert session.status is Status.REVEALED
    assert verify_commitment(expected_tag=tag, secret=revealed.secret, move=revealed.move)

    # Reveal may be repeated for display.
    assert session.get_revealed_secret_and_move() == (revealed.secret, revealed.move)


def test_second_submission_is_rejected(session: GameSession) -> None:
    session.submit_counterparty_move("Rock")
    with pytest.raises(SessionStateError):
        session.submit_counterparty_move("Paper")
    assert session.outcome == "win"


def test_outcome_matrix_any_time(session: GameSession) -> None:
    matrix = session.outcome_matrix()
    assert matrix.moves == tuple(CLASSIC)
    assert matrix.cell("Rock", "Scissors") == "win"
    session.submit_counterparty_move("Rock")
    assert session.get_outcome_matrix() == matrix


def test_close_discards_commitment(session: GameSession) -> None:
    session.submit_counterparty_move("Rock")
    session.reveal()
    session.close()
    assert session.status is Status.CLOSED
    with pytest.raises(SessionStateError):
        session.reveal()
    with pytest.raises(SessionStateError):
        _ = session.commitment_tag
    with pytest.raises(SessionStateError):
        session.outcome_matrix()


def test_sessions_are_independent() -> None:
    first = GameSession.new(CLASSIC)
    second = GameSession.new(CLASSIC)
    assert first.commitment_tag != second.commitment_tag
    first.submit_counterparty_move("Rock")
    assert second.status is Status.COMMITTED


def test_secret_bytes_option(fixed_source) -> None:
    session = GameSession.new(CLASSIC, random_source=fixed_source, secret_bytes=48)
    session.submit_counterparty_move("Rock")
    assert len(session.reveal().secret) == 96
