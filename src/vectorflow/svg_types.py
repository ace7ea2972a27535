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

"""Local-space geometry of each kind of shape.

Every kind answers the same questions (its outline as path data, its
primitives, its bounds, its editable nodes); nothing here knows about
transforms or grouping.
"""
import dataclasses
from typing import List
from vectorflow.geometric_types import Point, Rect
from vectorflow.path_geometry import PathGeometry
from vectorflow.path_parser import parse_path
from vectorflow.svg_meta import path_segment


@dataclasses.dataclass
class SVGShape:
    id: str = ""

    def as_path(self) -> "SVGPath":
        raise NotImplementedError("You should implement as_path")

    def as_geometry(self) -> PathGeometry:
        return parse_path(self.as_path().d)

    def bounding_box(self) -> Rect:
        """Tight bounds in the shape's own coordinates."""
        return self.as_geometry().bounding_box()

    def node_points(self) -> List[Point]:
        """Points a node editor would put handles on."""
        return self.as_geometry().control_points()


# https://www.w3.org/TR/SVG11/paths.html#PathElement
@dataclasses.dataclass
class SVGPath(SVGShape):
    d: str = ""

    def _add(self, path_snippet):
        if self.d:
            self.d += " "
        self.d += path_snippet

    def _add_cmd(self, cmd, *args):
        self._add(path_segment(cmd, *args))

    def M(self, *args):
        self._add_cmd("M", *args)

    def _arc(self, c, rx, ry, x, y, large_arc):
        self._add(path_segment(c, rx, ry, 0, large_arc, 1, x, y))

    def A(self, rx, ry, x, y, large_arc=0):
        self._arc("A", rx, ry, x, y, large_arc)

    def H(self, *args):
        self._add_cmd("H", *args)

    def V(self, *args):
        self._add_cmd("V", *args)

    def L(self, *args):
        self._add_cmd("L", *args)

    def end(self):
        self._add("Z")

    def as_path(self) -> "SVGPath":
        return self

    @classmethod
    def from_geometry(cls, geometry: PathGeometry, **kwargs) -> "SVGPath":
        return cls(d=geometry.tostring(), **kwargs)


# https://www.w3.org/TR/SVG11/shapes.html#CircleElement
@dataclasses.dataclass
class SVGCircle(SVGShape):
    r: float = 0
    cx: float = 0
    cy: float = 0

    def as_path(self) -> SVGPath:
        path = SVGEllipse(rx=self.r, ry=self.r, cx=self.cx, cy=self.cy).as_path()
        path.id = self.id
        return path


# https://www.w3.org/TR/SVG11/shapes.html#EllipseElement
@dataclasses.dataclass
class SVGEllipse(SVGShape):
    rx: float = 0
    ry: float = 0
    cx: float = 0
    cy: float = 0

    def as_path(self) -> SVGPath:
        rx, ry, cx, cy = self.rx, self.ry, self.cx, self.cy
        path = SVGPath(id=self.id)
        # arc doesn't seem to like being a complete shape, draw two halves.
        # We start at 3 o'clock and proceed in clockwise direction:
        # https://www.w3.org/TR/SVG/shapes.html#CircleElement
        path.M(cx + rx, cy)
        path.A(rx, ry, cx - rx, cy, large_arc=1)
        path.A(rx, ry, cx + rx, cy, large_arc=1)
        path.end()
        return path


# https://www.w3.org/TR/SVG11/shapes.html#LineElement
@dataclasses.dataclass
class SVGLine(SVGShape):
    x1: float = 0
    y1: float = 0
    x2: float = 0
    y2: float = 0

    def as_path(self) -> SVGPath:
        path = SVGPath(id=self.id)
        path.M(self.x1, self.y1)
        path.L(self.x2, self.y2)
        return path


# https://www.w3.org/TR/SVG11/shapes.html#PolygonElement
@dataclasses.dataclass
class SVGPolygon(SVGShape):
    points: str = ""

    def as_path(self) -> SVGPath:
        if self.points:
            return SVGPath(id=self.id, d="M" + self.points + " Z")
        return SVGPath(id=self.id)


# https://www.w3.org/TR/SVG11/shapes.html#PolylineElement
@dataclasses.dataclass
class SVGPolyline(SVGShape):
    points: str = ""

    def as_path(self) -> SVGPath:
        if self.points:
            return SVGPath(id=self.id, d="M" + self.points)
        return SVGPath(id=self.id)


# https://www.w3.org/TR/SVG11/shapes.html#RectElement
@dataclasses.dataclass
class SVGRect(SVGShape):
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    rx: float = 0
    ry: float = 0

    def __post_init__(self):
        if not self.rx:
            self.rx = self.ry
        if not self.ry:
            self.ry = self.rx
        self.rx = min(self.rx, self.width / 2)
        self.ry = min(self.ry, self.height / 2)

    def as_path(self) -> SVGPath:
        x, y, w, h, rx, ry = (
            self.x,
            self.y,
            self.width,
            self.height,
            self.rx,
            self.ry,
        )
        path = SVGPath(id=self.id)
        path.M(x + rx, y)
        path.H(x + w - rx)
        if rx > 0:
            path.A(rx, ry, x + w, y + ry)
        path.V(y + h - ry)
        if rx > 0:
            path.A(rx, ry, x + w - rx, y + h)
        path.H(x + rx)
        if rx > 0:
            path.A(rx, ry, x, y + h - ry)
        path.V(y + ry)
        if rx > 0:
            path.A(rx, ry, x + rx, y)
        path.end()

        return path


# https://www.w3.org/TR/SVG11/text.html#TextElement
@dataclasses.dataclass
class SVGText(SVGShape):
    """A run of text placed at its baseline origin (x, y).

    Glyph layout belongs to whoever renders; the caller supplies the measured
    advance width. Geometrically the text is its layout box, from the
    baseline up by font_size.
    """

    x: float = 0
    y: float = 0
    text: str = ""
    font_size: float = 16
    advance: float = 0

    def as_path(self) -> SVGPath:
        top = self.y - self.font_size
        return SVGRect(
            id=self.id, x=self.x, y=top, width=self.advance, height=self.font_size
        ).as_path()
