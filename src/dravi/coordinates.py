"""Relative coordinate systems used by the go-to prompt and the status readout."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional, Tuple

# Weight of the z component when it is flattened onto screen Y.
CYLINDRICAL_Z_FACTOR: Final[float] = 0.1


class CoordinateSystem(Enum):
    CARTESIAN = "cartesian"
    POLAR = "polar"
    CYLINDRICAL = "cylindrical"

    @property
    def arity(self) -> int:
        return 3 if self is CoordinateSystem.CYLINDRICAL else 2

    @property
    def hint(self) -> str:
        return _HINTS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_HINTS: Final[dict[CoordinateSystem, str]] = {
    CoordinateSystem.CARTESIAN: "x,y",
    CoordinateSystem.POLAR: "r,θ(deg)",
    CoordinateSystem.CYLINDRICAL: "ρ,θ(deg),z",
}

# Keys that select a system in Drawing and Settings modes.
SYSTEM_BY_KEY: Final[dict[str, CoordinateSystem]] = {
    "1": CoordinateSystem.CARTESIAN,
    "2": CoordinateSystem.POLAR,
    "3": CoordinateSystem.CYLINDRICAL,
}


@dataclass
class CoordinateTransform:
    """Convert between origin-relative coordinates and canvas positions.

    ``width`` and ``limit_y`` bound the clamped result: targets land in
    ``[0, width - 1] x [0, limit_y - 1]``.
    """

    origin_x: float
    origin_y: float
    width: int
    limit_y: int

    def set_origin(self, x: float, y: float) -> None:
        self.origin_x = x
        self.origin_y = y

    def parse_target(
        self, text: str, system: CoordinateSystem
    ) -> Optional[Tuple[float, float]]:
        """Return the clamped canvas position for ``text`` or ``None``.

        ``None`` means the input was malformed and the caller should leave the
        cursor where it is.
        """

        values = _parse_components(text, system.arity)
        if values is None:
            return None
        if system is CoordinateSystem.CARTESIAN:
            rel_x, rel_y = values
        else:
            radius, theta = values[0], math.radians(values[1])
            rel_x = radius * math.cos(theta)
            rel_y = radius * math.sin(theta)
            if system is CoordinateSystem.CYLINDRICAL:
                rel_y += values[2] * CYLINDRICAL_Z_FACTOR
        # Screen rows grow downwards, so mathematical "up" subtracts.
        return self._clamp(self.origin_x + rel_x, self.origin_y - rel_y)

    def relative_coordinates(
        self, x: float, y: float, system: CoordinateSystem
    ) -> Tuple[float, ...]:
        rel_x = x - self.origin_x
        rel_y = self.origin_y - y
        if system is CoordinateSystem.CARTESIAN:
            return (rel_x, rel_y)
        theta = math.degrees(math.atan2(rel_y, rel_x))
        if system is CoordinateSystem.POLAR:
            return (math.hypot(rel_x, rel_y), theta)
        # Inverse of the flattened projection in the theta = 0 half-plane.
        return (abs(rel_x), theta, rel_y / CYLINDRICAL_Z_FACTOR)

    def describe(self, x: float, y: float, system: CoordinateSystem) -> str:
        values = self.relative_coordinates(x, y, system)
        if system is CoordinateSystem.CARTESIAN:
            return "({:.1f}, {:.1f})".format(*values)
        if system is CoordinateSystem.POLAR:
            return "(r:{:.1f}, θ:{:.1f}°)".format(*values)
        return "(ρ:{:.1f}, θ:{:.1f}°, z:{:.1f})".format(*values)

    def _clamp(self, x: float, y: float) -> Tuple[float, float]:
        return (
            min(max(x, 0.0), float(self.width - 1)),
            min(max(y, 0.0), float(self.limit_y - 1)),
        )


def _parse_components(text: str, arity: int) -> Optional[Tuple[float, ...]]:
    parts = text.split(",")
    if len(parts) != arity:
        return None
    values = []
    for part in parts:
        try:
            value = float(part.strip())
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        values.append(value)
    return tuple(values)


__all__ = [
    "CYLINDRICAL_Z_FACTOR",
    "CoordinateSystem",
    "CoordinateTransform",
    "SYSTEM_BY_KEY",
]
