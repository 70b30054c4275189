from __future__ import annotations


class GameError(Exception):
    """Base class for every error the game core reports to its caller."""


class InvalidMoveSet(GameError, ValueError):
    pass


class UnknownMove(GameError, LookupError):
    def __init__(self, move: object) -> None:
        super().__init__(f"unknown move: {move!r}")
        self.move = move


class NotYetResolved(GameError):
    pass


class EntropyUnavailable(GameError):
    pass


class SessionStateError(GameError):
    pass
