"""Shared pytest fixtures for CHIP-8 machine tests."""

from __future__ import annotations

from typing import Callable

import pytest

from chip8 import Machine, encode_words

LoadWords = Callable[..., Machine]


@pytest.fixture
def machine() -> Machine:
    # Fixed random byte so RND results are predictable.
    return Machine(rng=lambda: 0xAB)


@pytest.fixture
def load_words(machine: Machine) -> LoadWords:
    """Load big-endian instruction words at the program start address."""

    def _load(*words: int) -> Machine:
        machine.load(encode_words(*words))
        return machine

    return _load
