"""Small 2D/3D vector types and segment/circle collision tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

_SEGMENT_TOLERANCE = 0.1


@dataclass
class Vec2:
    x: float = 0
    y: float = 0

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    @staticmethod
    def dist(a: Vec2, b: Vec2) -> float:
        """Euclidean distance between two points."""
        return math.hypot(b.x - a.x, b.y - a.y)


@dataclass
class Vec3:
    x: float = 0
    y: float = 0
    z: float = 0

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)


@dataclass
class Vec4:
    x: float = 0
    y: float = 0
    z: float = 0
    w: float = 0


@dataclass
class Line2D:
    """A line segment between two points."""

    first: Vec2 = field(default_factory=Vec2)
    second: Vec2 = field(default_factory=Vec2)

    def is_colliding(self, other: Union[Vec2, Circle2D]) -> bool:
        """Whether a point lies on the segment, or a circle touches it."""
        if isinstance(other, Vec2):
            d1 = Vec2.dist(other, self.first)
            d2 = Vec2.dist(other, self.second)
            length = Vec2.dist(self.first, self.second)
            total = d1 + d2
            return length - _SEGMENT_TOLERANCE <= total <= length + _SEGMENT_TOLERANCE
        if isinstance(other, Circle2D):
            return _segment_hits_circle(self, other)
        raise TypeError(f"cannot test a line against {type(other).__name__}")


@dataclass
class Circle2D:
    center: Vec2 = field(default_factory=Vec2)
    radius: float = 0

    def is_colliding(self, other: Union[Vec2, Line2D]) -> bool:
        """Whether a point lies strictly inside, or a segment touches the circle."""
        if isinstance(other, Vec2):
            return Vec2.dist(other, self.center) < self.radius
        if isinstance(other, Line2D):
            return _segment_hits_circle(other, self)
        raise TypeError(f"cannot test a circle against {type(other).__name__}")


def _segment_hits_circle(line: Line2D, circle: Circle2D) -> bool:
    if circle.is_colliding(line.first) or circle.is_colliding(line.second):
        return True

    length = Vec2.dist(line.first, line.second)
    if length == 0:
        return False

    dx = line.second.x - line.first.x
    dy = line.second.y - line.first.y
    t = ((circle.center.x - line.first.x) * dx + (circle.center.y - line.first.y) * dy) / length**2
    closest = Vec2(line.first.x + t * dx, line.first.y + t * dy)

    if not line.is_colliding(closest):
        return False
    return Vec2.dist(closest, circle.center) <= circle.radius