from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))


class FixedRandomSource:
    """Deterministic stand-in for the OS random source."""

    def __init__(self, index: int = 0, secret: bytes = bytes(range(32))) -> None:
        self.index = index
        self.secret = secret
        self.index_calls: list[int] = []
        self.byte_calls: list[int] = []

    def secure_bytes(self, n: int) -> bytes:
        self.byte_calls.append(n)
        return (self.secret * (n // len(self.secret) + 1))[:n]

    def uniform_index(self, n: int) -> int:
        self.index_calls.append(n)
        return self.index % n


@pytest.fixture
def fixed_source() -> FixedRandomSource:
    return FixedRandomSource()


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("RPS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("RPS_SECRET_BYTES", raising=False)
