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

"""Walk svg path data and emit absolute geometry primitives.

https://www.w3.org/TR/SVG11/paths.html#PathData
"""
import dataclasses
from typing import Optional, Tuple
from vectorflow.arc_to_cubic import arc_to
from vectorflow.geometric_types import Point, Vector
from vectorflow.path_geometry import (
    ArcTo,
    Close,
    CubicTo,
    LineTo,
    MoveTo,
    PathGeometry,
    QuadTo,
)
from vectorflow.svg_path_iter import parse_svg_path


# Shorthand command => the command whose last control point it reflects
_REFLECTS = {"S": "C", "T": "Q"}


@dataclasses.dataclass
class ParserState:
    """Where the pen is between commands.

    last_control_point equals current_point after any command that is not a
    curve, which is what gives S and T nothing to reflect in that case.
    last_curve is "C" or "Q" when the previous command was a curve of that
    family, None otherwise.
    """

    current_point: Point = Point()
    subpath_start: Point = Point()
    last_control_point: Point = Point()
    last_curve: Optional[str] = None

    def advance(
        self, point: Point, control: Optional[Point] = None, curve: Optional[str] = None
    ):
        self.current_point = point
        self.last_control_point = point if control is None else control
        self.last_curve = curve

    def reflected_control_point(self, cmd: str) -> Point:
        """First control point of a shorthand S or T command."""
        if self.last_curve != _REFLECTS[cmd]:
            return self.current_point
        cx, cy = self.current_point
        lx, ly = self.last_control_point
        return Point(2 * cx - lx, 2 * cy - ly)


def _absolute(state: ParserState, cmd: str, args: Tuple[float, ...]):
    """Return absolute points for the (x, y) pairs of a command."""
    points = [Point(*args[i : i + 2]) for i in range(0, len(args), 2)]
    if cmd.islower():
        offset = Vector(*state.current_point)
        points = [p + offset for p in points]
    return points


class PathInterpreter:
    """Stateful walker turning path data into a PathGeometry.

    With arcs_to_cubics, elliptical arcs are emitted as up to four CubicTo
    rather than a single ArcTo, for consumers that can't draw rotated arcs.
    """

    def __init__(self, arcs_to_cubics: bool = False):
        self.arcs_to_cubics = arcs_to_cubics
        self.state = ParserState()

    def parse(self, svg_path: str) -> PathGeometry:
        """Parse path data, never raising; state is reset first."""
        self.state = ParserState()
        geometry = PathGeometry()
        for cmd, args in parse_svg_path(svg_path, exploded=True):
            self._execute(geometry, cmd, args)
        return geometry

    def _execute(self, geometry: PathGeometry, cmd: str, args: Tuple[float, ...]):
        state = self.state
        upper = cmd.upper()

        if upper == "Z":
            geometry.append(Close())
            state.advance(state.subpath_start)

        elif upper == "M":
            (point,) = _absolute(state, cmd, args)
            geometry.append(MoveTo(point))
            state.subpath_start = point
            state.advance(point)

        elif upper == "L":
            (point,) = _absolute(state, cmd, args)
            geometry.append(LineTo(point))
            state.advance(point)

        elif upper in ("H", "V"):
            (value,) = args
            x, y = state.current_point
            idx = 0 if upper == "H" else 1
            if cmd.islower():
                value += state.current_point[idx]
            point = Point(value, y) if upper == "H" else Point(x, value)
            geometry.append(LineTo(point))
            state.advance(point)

        elif upper == "C":
            c1, c2, end = _absolute(state, cmd, args)
            geometry.append(CubicTo(c1, c2, end))
            state.advance(end, c2, "C")

        elif upper == "S":
            c1 = state.reflected_control_point(upper)
            c2, end = _absolute(state, cmd, args)
            geometry.append(CubicTo(c1, c2, end))
            state.advance(end, c2, "C")

        elif upper == "Q":
            c, end = _absolute(state, cmd, args)
            geometry.append(QuadTo(c, end))
            state.advance(end, c, "Q")

        elif upper == "T":
            c = state.reflected_control_point(upper)
            (end,) = _absolute(state, cmd, args)
            geometry.append(QuadTo(c, end))
            state.advance(end, c, "Q")

        elif upper == "A":
            rx, ry, rotation, large, sweep = args[:5]
            (end,) = _absolute(state, cmd, args[5:])
            primitive = arc_to(
                state.current_point, rx, ry, rotation, large, sweep, end
            )
            if isinstance(primitive, ArcTo) and self.arcs_to_cubics:
                for cubic in primitive.to_cubics():
                    geometry.append(cubic)
            elif primitive is not None:
                geometry.append(primitive)
            state.advance(end)


def parse_path(svg_path: str, arcs_to_cubics: bool = False) -> PathGeometry:
    """Parse svg path data into absolute primitives.

    Total over all inputs: unreadable characters are skipped, incomplete
    argument groups dropped and degenerate arcs resolved, never raised.
    """
    return PathInterpreter(arcs_to_cubics=arcs_to_cubics).parse(svg_path)
