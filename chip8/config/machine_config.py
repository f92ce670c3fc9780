"""Machine configuration for the CHIP-8 core."""

from dataclasses import dataclass, asdict
from typing import Optional
import json

_VALID_BCD_MODULI = (10, 100)


@dataclass
class MachineConfig:
    """CHIP-8 machine configuration.

    ``instructions_per_second`` and ``timer_hz`` are pacing hints for the
    host; the machine itself never looks at a clock.
    """
    name: str = "CHIP-8"
    instructions_per_second: int = 700
    timer_hz: int = 60
    random_seed: Optional[int] = None
    bcd_ones_modulus: int = 100  # FX33 ones digit is value % modulus

    def __post_init__(self):
        if self.instructions_per_second <= 0:
            raise ValueError(
                f"instructions_per_second must be positive, got {self.instructions_per_second}"
            )
        if self.timer_hz <= 0:
            raise ValueError(f"timer_hz must be positive, got {self.timer_hz}")
        if self.bcd_ones_modulus not in _VALID_BCD_MODULI:
            raise ValueError(
                f"bcd_ones_modulus must be one of {_VALID_BCD_MODULI}, got {self.bcd_ones_modulus}"
            )

    @property
    def instructions_per_frame(self) -> int:
        """Instructions to run between two timer ticks (at least one)."""
        return max(1, self.instructions_per_second // self.timer_hz)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'MachineConfig':
        defaults = cls()
        return cls(
            name=data.get("name", defaults.name),
            instructions_per_second=int(
                data.get("instructions_per_second", defaults.instructions_per_second)
            ),
            timer_hz=int(data.get("timer_hz", defaults.timer_hz)),
            random_seed=data.get("random_seed", defaults.random_seed),
            bcd_ones_modulus=int(data.get("bcd_ones_modulus", defaults.bcd_ones_modulus)),
        )

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'MachineConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def for_model(cls, model: str) -> 'MachineConfig':
        """Get configuration for a named variant."""
        configs = {
            "CHIP-8": cls(),
            "CHIP-8-BCD": cls(name="CHIP-8 (decimal BCD)", bcd_ones_modulus=10),
        }

        return configs.get(model, configs["CHIP-8"])
