"""Sixteen-key hexadecimal keypad state."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .constants import NUM_KEYS
from .errors import InvalidKeyError


@dataclass(frozen=True, slots=True)
class KeyIndex:
    """Key selector 0x0..0xF."""

    value: int

    def __post_init__(self) -> None:
        try:
            value = operator.index(self.value)
        except TypeError:
            raise InvalidKeyError(f"Key index must be an integer: {self.value!r}") from None
        if not 0 <= value < NUM_KEYS:
            raise InvalidKeyError(f"Key index out of range: {value}")
        object.__setattr__(self, "value", value)

    def __index__(self) -> int:
        return self.value


class Keypad:
    """Pressed/released state per key, written by the host between instructions."""

    def __init__(self) -> None:
        self._pressed = [False] * NUM_KEYS

    def reset(self) -> None:
        for i in range(NUM_KEYS):
            self._pressed[i] = False

    def set_key(self, index: int, pressed: bool) -> None:
        self._pressed[KeyIndex(index)] = bool(pressed)

    def press(self, index: int) -> None:
        self.set_key(index, True)

    def release(self, index: int) -> None:
        self.set_key(index, False)

    def release_all(self) -> None:
        self.reset()

    def is_pressed(self, index: int) -> bool:
        return self._pressed[KeyIndex(index)]

    def first_pressed(self) -> Optional[int]:
        """Lowest-numbered pressed key, or None."""
        for index, pressed in enumerate(self._pressed):
            if pressed:
                return index
        return None

    def pressed_keys(self) -> Tuple[int, ...]:
        return tuple(i for i, pressed in enumerate(self._pressed) if pressed)

    def snapshot(self) -> Tuple[bool, ...]:
        return tuple(self._pressed)

    def apply(self, press: Iterable[int] = (), release: Iterable[int] = ()) -> None:
        """Release then press the given keys."""
        for index in release:
            self.release(index)
        for index in press:
            self.press(index)
