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

"""Primitive geometry stream produced by parsing path data.

Each primitive is its own tagged type so consumers (node editing, painting)
never have to guess from position whether a point is an anchor or a control.
"""
import dataclasses
import enum
from math import ceil, cos, fabs, isfinite, pi, radians, sin, tan
from typing import Iterable, Iterator, List, Optional, Tuple, Union
from vectorflow import svg_pathops
from vectorflow.geometric_types import Point, Rect, Vector
from vectorflow.svg_meta import SVGCommandGen, path_segment
from vectorflow.svg_transform import Affine2D


PI_OVER_TWO = 0.5 * pi


class NodeKind(enum.Enum):
    """What a point in PathGeometry.control_points() is to its primitive."""

    MOVE = "move"
    LINE = "line"
    CONTROL = "control"  # off-curve point of a cubic or quadratic
    CURVE = "curve"  # on-curve end point of a cubic or quadratic
    ARC = "arc"


@dataclasses.dataclass(frozen=True)
class MoveTo:
    point: Point

    cmd = "M"

    def end_point(self) -> Optional[Point]:
        return self.point

    def nodes(self) -> Tuple[Tuple[Point, NodeKind], ...]:
        return ((self.point, NodeKind.MOVE),)

    def args(self) -> Tuple[float, ...]:
        return tuple(self.point)


@dataclasses.dataclass(frozen=True)
class LineTo:
    point: Point

    cmd = "L"

    def end_point(self) -> Optional[Point]:
        return self.point

    def nodes(self) -> Tuple[Tuple[Point, NodeKind], ...]:
        return ((self.point, NodeKind.LINE),)

    def args(self) -> Tuple[float, ...]:
        return tuple(self.point)


@dataclasses.dataclass(frozen=True)
class CubicTo:
    c1: Point
    c2: Point
    end: Point

    cmd = "C"

    def end_point(self) -> Optional[Point]:
        return self.end

    def nodes(self) -> Tuple[Tuple[Point, NodeKind], ...]:
        return (
            (self.c1, NodeKind.CONTROL),
            (self.c2, NodeKind.CONTROL),
            (self.end, NodeKind.CURVE),
        )

    def args(self) -> Tuple[float, ...]:
        return (*self.c1, *self.c2, *self.end)


@dataclasses.dataclass(frozen=True)
class QuadTo:
    c: Point
    end: Point

    cmd = "Q"

    def end_point(self) -> Optional[Point]:
        return self.end

    def nodes(self) -> Tuple[Tuple[Point, NodeKind], ...]:
        return ((self.c, NodeKind.CONTROL), (self.end, NodeKind.CURVE))

    def args(self) -> Tuple[float, ...]:
        return (*self.c, *self.end)


# Center parameterization of an elliptical arc, see
# https://www.w3.org/TR/SVG/implnote.html#ArcParameterizationAlternatives
@dataclasses.dataclass(frozen=True)
class ArcTo:
    center: Point
    rx: float
    ry: float
    rotation: float  # x-axis rotation, degrees
    start_angle: float  # radians, in the ellipse's own frame
    sweep_angle: float  # radians, positive in the direction of sweep-flag=1
    end: Point

    cmd = "A"

    def end_point(self) -> Optional[Point]:
        return self.end

    def nodes(self) -> Tuple[Tuple[Point, NodeKind], ...]:
        return ((self.end, NodeKind.ARC),)

    def large_arc(self) -> int:
        return int(fabs(self.sweep_angle) > pi)

    def sweep(self) -> int:
        return int(self.sweep_angle > 0)

    def args(self) -> Tuple[float, ...]:
        return (
            self.rx,
            self.ry,
            self.rotation,
            self.large_arc(),
            self.sweep(),
            *self.end,
        )

    def unit_transform(self) -> Affine2D:
        """Affine mapping the unit circle onto this arc's ellipse."""
        return (
            Affine2D.identity()
            .translate(self.center.x, self.center.y)
            .rotate(radians(self.rotation))
            .scale(self.rx, self.ry)
        )

    def to_cubics(self) -> Iterator["CubicTo"]:
        """Subdivide into at most 4 cubics spanning no more than 90° each.

        The code is adapted from FontTools fontTools/svgLib/path/arc.py, which in
        turn is adapted from Blink's SVGPathNormalizer::DecomposeArcToCubic.
        """
        point_transform = self.unit_transform()

        # Some results of atan2 on some platform implementations are not exact
        # enough. So that we get more cubic curves than expected here. Adding 0.001f
        # reduces the count of sgements to the correct count.
        num_segments = int(ceil(fabs(self.sweep_angle / (PI_OVER_TWO + 0.001))))
        for i in range(num_segments):
            start_theta = self.start_angle + i * self.sweep_angle / num_segments
            end_theta = self.start_angle + (i + 1) * self.sweep_angle / num_segments

            t = (4 / 3) * tan(0.25 * (end_theta - start_theta))
            if not isfinite(t):
                return

            sin_start_theta = sin(start_theta)
            cos_start_theta = cos(start_theta)
            sin_end_theta = sin(end_theta)
            cos_end_theta = cos(end_theta)

            point1 = Point(
                cos_start_theta - t * sin_start_theta,
                sin_start_theta + t * cos_start_theta,
            )
            end_point = Point(cos_end_theta, sin_end_theta)
            point2 = end_point + Vector(t * sin_end_theta, -t * cos_end_theta)

            point1 = point_transform.map_point(point1)
            point2 = point_transform.map_point(point2)
            end_point = point_transform.map_point(end_point)
            if i == num_segments - 1:
                # land exactly where the path data said to
                end_point = self.end

            yield CubicTo(point1, point2, end_point)


@dataclasses.dataclass(frozen=True)
class Close:
    cmd = "Z"

    def end_point(self) -> Optional[Point]:
        return None

    def nodes(self) -> Tuple[Tuple[Point, NodeKind], ...]:
        return ()

    def args(self) -> Tuple[float, ...]:
        return ()


Primitive = Union[MoveTo, LineTo, CubicTo, QuadTo, ArcTo, Close]


class PathGeometry:
    """Ordered, append-only sequence of primitives.

    Coordinates are absolute in whatever space the path data was authored in.
    """

    def __init__(self, primitives: Iterable[Primitive] = ()):
        self._primitives: List[Primitive] = list(primitives)

    def append(self, primitive: Primitive):
        self._primitives.append(primitive)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def __getitem__(self, idx):
        return self._primitives[idx]

    def __eq__(self, other):
        if isinstance(other, PathGeometry):
            return self._primitives == other._primitives
        if isinstance(other, (list, tuple)):
            return self._primitives == list(other)
        return NotImplemented

    def __repr__(self):
        return f"PathGeometry({self._primitives!r})"

    def control_points(self) -> List[Point]:
        """All points of all primitives, in order; see control_point_kinds."""
        return [pt for prim in self for pt, _ in prim.nodes()]

    def control_point_kinds(self) -> List[NodeKind]:
        """NodeKind of each entry of control_points(), index for index."""
        return [kind for prim in self for _, kind in prim.nodes()]

    def arcs_to_cubics(self) -> "PathGeometry":
        """Return equivalent geometry with every ArcTo replaced by cubics."""
        result = PathGeometry()
        for prim in self:
            if isinstance(prim, ArcTo):
                for cubic in prim.to_cubics():
                    result.append(cubic)
            else:
                result.append(prim)
        return result

    def transform(self, affine: Affine2D) -> "PathGeometry":
        """Return geometry with every point mapped by affine.

        Arcs become cubics first; an ellipse under shear or non-uniform scale
        is no longer described by the same radii.
        """
        result = PathGeometry()
        for prim in self.arcs_to_cubics():
            if isinstance(prim, Close):
                result.append(prim)
                continue
            values = [
                getattr(prim, f.name) for f in dataclasses.fields(prim)
            ]  # all Points
            result.append(prim.__class__(*(affine.map_point(v) for v in values)))
        return result

    def as_cmd_seq(self) -> SVGCommandGen:
        """Yields absolute (cmd, args), arcs as cubics, fit for svg_pathops."""
        for prim in self.arcs_to_cubics():
            yield prim.cmd, prim.args()

    def bounding_box(self, transform: Optional[Affine2D] = None) -> Rect:
        """Tight bounds, optionally after mapping by transform."""
        if not self._primitives:
            return Rect()
        x1, y1, x2, y2 = svg_pathops.bounding_box(self.as_cmd_seq(), transform)
        return Rect.from_bounds(x1, y1, x2, y2)

    def tostring(self) -> str:
        return " ".join(path_segment(prim.cmd, *prim.args()) for prim in self)
