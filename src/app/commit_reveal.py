from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field
from typing import Final, Protocol

from errors import EntropyUnavailable
from rules import MoveSet

MIN_SECRET_BYTES: Final[int] = 32
TAG_HEX_LENGTH: Final[int] = 64


class RandomSource(Protocol):
    def secure_bytes(self, n: int) -> bytes: ...

    def uniform_index(self, n: int) -> int: ...


class SystemRandomSource:
    """OS CSPRNG via the `secrets` module.

    `secrets.randbelow` draws `n.bit_length()` random bits and retries while
    the value is >= n, so every index in [0, n) has probability exactly 1/n.
    """

    def secure_bytes(self, n: int) -> bytes:
        try:
            return secrets.token_bytes(n)
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailable(f"secure random source failed: {exc}") from exc

    def uniform_index(self, n: int) -> int:
        try:
            return secrets.randbelow(n)
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailable(f"secure random source failed: {exc}") from exc


@dataclass(frozen=True)
class Commitment:
    secret: bytes = field(repr=False)
    move: str = field(repr=False)
    tag: str

    @property
    def secret_hex(self) -> str:
        return self.secret.hex()


def generate_secret(source: RandomSource, num_bytes: int = MIN_SECRET_BYTES) -> bytes:
    if num_bytes < MIN_SECRET_BYTES:
        raise ValueError(f"secret must be at least {MIN_SECRET_BYTES} bytes, got {num_bytes}")
    secret = source.secure_bytes(num_bytes)
    if len(secret) != num_bytes:
        raise EntropyUnavailable(f"random source returned {len(secret)} bytes, expected {num_bytes}")
    return secret


def select_move(move_set: MoveSet, source: RandomSource) -> str:
    index = source.uniform_index(len(move_set))
    return move_set.name_of(index)


def compute_tag(secret: bytes, move: str) -> str:
    # The key is the hex text of the secret, i.e. the exact string shown to the
    # player at reveal time, so any HMAC-SHA256 tool reproduces the tag.
    key = secret.hex().encode("ascii")
    return hmac.new(key, move.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_commitment(*, expected_tag: str, secret: bytes | str, move: str) -> bool:
    if len(expected_tag) != TAG_HEX_LENGTH:
        return False
    if isinstance(secret, str):
        # Only the canonical lowercase form is the published key.
        try:
            raw = bytes.fromhex(secret)
        except ValueError:
            return False
        if raw.hex() != secret:
            return False
        secret = raw
    computed = compute_tag(secret, move)
    return hmac.compare_digest(expected_tag.encode("utf-8"), computed.encode("utf-8"))


def create_commitment(
    move_set: MoveSet,
    source: RandomSource,
    secret_bytes: int = MIN_SECRET_BYTES,
) -> Commitment:
    move = select_move(move_set, source)
    secret = generate_secret(source, secret_bytes)
    return Commitment(secret=secret, move=move, tag=compute_tag(secret, move))
