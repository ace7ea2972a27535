# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Iterable, NamedTuple, Tuple, Union


DEFAULT_ALMOST_EQUAL_TOLERANCE = 1e-9
_PointOrVec = Union["Point", "Vector"]


def almost_equal(c1, c2, tolerance=DEFAULT_ALMOST_EQUAL_TOLERANCE) -> bool:
    return abs(c1 - c2) <= tolerance


class Point(NamedTuple):
    x: float = 0
    y: float = 0

    def _sub_pt(self, other: "Point") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def _sub_vec(self, other: "Vector") -> "Point":
        return self.__class__(self.x - other.x, self.y - other.y)

    def __sub__(self, other: _PointOrVec) -> _PointOrVec:
        """Return a Point or Vector based on the type of other.

        If other is a Point, return Vector from other to self.
        If other is a Vector, return Point translated by -other Vector.
        """
        if isinstance(other, Point):
            return self._sub_pt(other)
        elif isinstance(other, Vector):
            return self._sub_vec(other)
        return NotImplemented

    def __add__(self, other: "Vector") -> "Point":
        """Return Point translated by other Vector"""
        if isinstance(other, Vector):
            return self.__class__(self.x + other.x, self.y + other.y)
        return NotImplemented

    def almost_equals(
        self, other: "Point", tolerance=DEFAULT_ALMOST_EQUAL_TOLERANCE
    ) -> bool:
        return almost_equal(self.x, other.x, tolerance) and almost_equal(
            self.y, other.y, tolerance
        )


class Vector(NamedTuple):
    x: float = 0
    y: float = 0

    def __add__(self, other: "Vector") -> "Vector":
        return self.__class__(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return self.__class__(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector":
        return self * -1.0

    def __mul__(self, scalar: float) -> "Vector":
        """Multiply vector by a scalar value."""
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return self.__class__(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def dot(self, other: "Vector") -> float:
        """Return the Dot Product of self with other vector."""
        return self.x * other.x + self.y * other.y


class Rect(NamedTuple):
    x: float = 0
    y: float = 0
    w: float = 0
    h: float = 0

    @classmethod
    def from_points(cls, points: Iterable[Tuple[float, float]]) -> "Rect":
        """Return the smallest Rect containing all points, or an empty Rect."""
        points = list(points)
        if not points:
            return cls()
        xs = [x for x, _ in points]
        ys = [y for _, y in points]
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @classmethod
    def from_bounds(cls, x1: float, y1: float, x2: float, y2: float) -> "Rect":
        return cls(x1, y1, x2 - x1, y2 - y1)

    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.y + self.h / 2)

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        x1, y1 = self.x, self.y
        x2, y2 = self.x + self.w, self.y + self.h
        return (Point(x1, y1), Point(x2, y1), Point(x2, y2), Point(x1, y2))

    def union(self, other: "Rect") -> "Rect":
        """Return the smallest Rect containing both self and other.

        A degenerate (zero width or height) Rect still contributes its
        extent; a line segment has bounds too.
        """
        return Rect.from_points(self.corners() + other.corners())

    def almost_equals(
        self, other: "Rect", tolerance=DEFAULT_ALMOST_EQUAL_TOLERANCE
    ) -> bool:
        return all(almost_equal(v1, v2, tolerance) for v1, v2 in zip(self, other))
