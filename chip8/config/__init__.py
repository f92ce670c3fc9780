"""Configuration system for the CHIP-8 core."""

from .machine_config import MachineConfig

__all__ = ["MachineConfig"]
