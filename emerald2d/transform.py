"""Positions, scales and transforms of entities in the world."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Translation:
    """A position in two dimensions."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_tuple(cls, value: tuple[float, float]) -> "Translation":
        x, y = value
        return cls(float(x), float(y))

    def __add__(self, other: "Translation") -> "Translation":
        if not isinstance(other, Translation):
            return NotImplemented
        return Translation(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Translation") -> "Translation":
        if not isinstance(other, Translation):
            return NotImplemented
        return Translation(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Translation":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Translation(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Translation":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Translation(self.x / scalar, self.y / scalar)


@dataclass
class Scale:
    """A scale factor along each axis."""

    x: float = 1.0
    y: float = 1.0

    def __add__(self, other: "Scale") -> "Scale":
        if not isinstance(other, Scale):
            return NotImplemented
        return Scale(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Scale") -> "Scale":
        if not isinstance(other, Scale):
            return NotImplemented
        return Scale(self.x - other.x, self.y - other.y)


@dataclass
class Transform:
    """Translation, rotation and scale of an entity."""

    translation: Translation = field(default_factory=Translation)
    rotation: float = 0.0
    scale: Scale = field(default_factory=Scale)

    @classmethod
    def from_translation(cls, value: Translation | tuple[float, float]) -> "Transform":
        if not isinstance(value, Translation):
            value = Translation.from_tuple(value)
        return cls(translation=value)

    def __add__(self, other: "Transform") -> "Transform":
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(
            self.translation + other.translation,
            self.rotation + other.rotation,
            self.scale + other.scale,
        )

    def __sub__(self, other: "Transform") -> "Transform":
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(
            self.translation - other.translation,
            self.rotation - other.rotation,
            self.scale - other.scale,
        )