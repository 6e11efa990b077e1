"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .scoring import MAX_LEVEL


# Smallest board that still fits every piece's bounding box.
MIN_DIMENSION = 4

_MAPPING_KEYS = {
    "width": "width",
    "height": "height",
    "initial_level": "initial_level",
    "initialLevel": "initial_level",
}


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and starting level for a session."""

    width: int = 10
    height: int = 20
    initial_level: int = 1

    def __post_init__(self) -> None:
        if self.width < MIN_DIMENSION or self.height < MIN_DIMENSION:
            raise ValueError(
                f"Board must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, "
                f"got {self.width}x{self.height}"
            )
        if not 1 <= self.initial_level <= MAX_LEVEL:
            raise ValueError(
                f"initial_level must be between 1 and {MAX_LEVEL}, got {self.initial_level}"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "GameConfig":
        """Build a config from a partial mapping of options.

        Missing options keep their defaults.  Both ``initial_level`` and the
        camelCase ``initialLevel`` spelling are accepted.
        """

        kwargs = {}
        for key, value in options.items():
            if key not in _MAPPING_KEYS:
                raise TypeError(f"Unknown config option: {key}")
            kwargs[_MAPPING_KEYS[key]] = int(value)
        return cls(**kwargs)
