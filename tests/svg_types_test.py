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

import pytest
from vectorflow.geometric_types import Point, Rect
from vectorflow.path_parser import parse_path
from vectorflow.svg_types import (
    SVGCircle,
    SVGEllipse,
    SVGLine,
    SVGPath,
    SVGPolygon,
    SVGPolyline,
    SVGRect,
    SVGText,
)


@pytest.mark.parametrize(
    "path, expected_result",
    [
        # path explodes to show implicit commands & becomes absolute
        ("m1,1 2,0 1,3", "M1,1 L3,1 L4,4"),
        # Vertical, Horizontal movement
        ("m2,2 h2 v2 h-1 v-1 H8 V8", "M2,2 L4,2 L4,4 L3,4 L3,3 L8,3 L8,8"),
        # Quadratic bezier curve
        ("m2,2 q1,1 2,2 Q5,5 6,6", "M2,2 Q3,3 4,4 Q5,5 6,6"),
        # Cubic bezier
        ("m2,2 c1,-1 2,4 3,3 C4 4 5 5 6 6", "M2,2 C3,1 4,6 5,5 C4,4 5,5 6,6"),
        # Relative 'm' in sub-path following a closed sub-path.
        (
            "m0,0 l0,10 l10,0 z m10,10 l0,10 l10,0 z",
            "M0,0 L0,10 L10,10 Z M10,10 L10,20 L20,20 Z",
        ),
        # z is a single backref not a stack
        (
            "M3,3 M1,1 l0,10 l4,0 z Z z l8,2 0,2 z m4,4 1,1 -2,0 z",
            "M3,3 M1,1 L1,11 L5,11 Z Z Z L9,3 L9,5 Z M5,5 L6,6 L4,6 Z",
        ),
        # C/S
        (
            "M600,800 C625,700 725,700 750,800 S875,900 900,800",
            "M600,800 C625,700 725,700 750,800 C775,900 875,900 900,800",
        ),
        # Q/T
        (
            "M16,12 Q20,14 16,16 T16,20 L24,20 24,12",
            "M16,12 Q20,14 16,16 Q12,18 16,20 L24,20 L24,12",
        ),
        # S without preceding C
        ("S875,900 900,800", "C0,0 875,900 900,800"),
        # T without preceding Q
        ("M16,12 T16,20", "M16,12 Q16,12 16,20"),
        # C/s
        (
            "M600,800 C625,700 725,700 750,800 s55,55 200,100",
            "M600,800 C625,700 725,700 750,800 C775,900 805,855 950,900",
        ),
    ],
)
def test_path_geometry(path: str, expected_result: str):
    actual = SVGPath(d=path).as_geometry().tostring()
    print(f"A: {actual}")
    print(f"E: {expected_result}")
    assert actual == expected_result


def test_path_builder():
    path = SVGPath(id="p")
    path.M(1, 1)
    path.L(2, 2)
    path.A(3, 3, 4, 4, large_arc=1)
    path.end()
    assert path.d == "M1,1 L2,2 A3 3 0 1 1 4,4 Z"
    assert path.as_path() is path


def test_path_from_geometry():
    geometry = parse_path("m1,1 h2 v2 z")
    path = SVGPath.from_geometry(geometry, id="square")
    assert path.id == "square"
    assert path.d == "M1,1 L3,1 L3,3 Z"
    assert path.as_geometry() == geometry


@pytest.mark.parametrize(
    "shape, expected_path",
    [
        (SVGRect(x=2, y=2, width=6, height=2), "M2,2 H8 V4 H2 V2 Z"),
        (
            SVGRect(width=10, height=10, rx=2),
            "M2,0 H8 A2 2 0 0 1 10,2 V8 A2 2 0 0 1 8,10 H2 A2 2 0 0 1 0,8 "
            "V2 A2 2 0 0 1 2,0 Z",
        ),
        (
            SVGEllipse(rx=5, ry=3, cx=5, cy=5),
            "M10,5 A5 3 0 1 1 0,5 A5 3 0 1 1 10,5 Z",
        ),
        (SVGCircle(r=1), "M1,0 A1 1 0 1 1 -1,0 A1 1 0 1 1 1,0 Z"),
        (SVGLine(x1=1, y1=2, x2=3, y2=4), "M1,2 L3,4"),
        (SVGPolygon(points="1,1 5,1 3,4"), "M1,1 5,1 3,4 Z"),
        (SVGPolyline(points="1,1 5,1 3,4"), "M1,1 5,1 3,4"),
        (SVGPolygon(), ""),
        (SVGPolyline(), ""),
    ],
)
def test_as_path(shape, expected_path):
    assert shape.as_path().d == expected_path


def test_as_path_keeps_id():
    assert SVGCircle(id="c", r=1).as_path().id == "c"
    assert SVGRect(id="r", width=1, height=1).as_path().id == "r"


@pytest.mark.parametrize(
    "rect, expected_radii",
    [
        (SVGRect(width=10, height=10), (0, 0)),
        (SVGRect(width=10, height=10, rx=2), (2, 2)),
        (SVGRect(width=10, height=10, ry=3), (3, 3)),
        # radii are clamped to half the size
        (SVGRect(width=4, height=10, rx=5), (2, 5)),
    ],
)
def test_rect_radii(rect, expected_radii):
    assert (rect.rx, rect.ry) == expected_radii


@pytest.mark.parametrize(
    "shape, expected_bbox",
    [
        # plain rect
        (SVGRect(x=2, y=2, width=6, height=2), Rect(2, 2, 6, 2)),
        # rounded corners don't change the bounds
        (SVGRect(x=2, y=2, width=6, height=4, rx=1), Rect(2, 2, 6, 4)),
        # triangle
        (SVGPath(d="m5,2 2.5,5 -5,0 z"), Rect(2.5, 2, 5, 5)),
        (SVGCircle(r=5, cx=5, cy=5), Rect(0, 0, 10, 10)),
        (SVGEllipse(rx=4, ry=2, cx=0, cy=0), Rect(-4, -2, 8, 4)),
        (SVGLine(x1=1, y1=2, x2=3, y2=4), Rect(1, 2, 2, 2)),
        (SVGPolygon(points="1,1 5,1 3,4"), Rect(1, 1, 4, 3)),
        (SVGPolyline(points="0,0 10,0"), Rect(0, 0, 10, 0)),
        # text is its layout box, sitting on the baseline
        (
            SVGText(x=10, y=20, text="hi", font_size=12, advance=30),
            Rect(10, 8, 30, 12),
        ),
        (SVGPath(), Rect()),
    ],
)
def test_bounding_box(shape, expected_bbox):
    actual_bbox = shape.bounding_box()
    print(f"A: {actual_bbox}")
    print(f"E: {expected_bbox}")
    assert actual_bbox == pytest.approx(expected_bbox, abs=1e-2)


@pytest.mark.parametrize(
    "shape, expected_points",
    [
        (SVGLine(x1=1, y1=2, x2=3, y2=4), [Point(1, 2), Point(3, 4)]),
        (
            SVGPolygon(points="1,1 5,1 3,4"),
            [Point(1, 1), Point(5, 1), Point(3, 4)],
        ),
        (
            SVGRect(x=1, y=2, width=3, height=4),
            [Point(1, 2), Point(4, 2), Point(4, 6), Point(1, 6), Point(1, 2)],
        ),
        (
            SVGPath(d="M0,0 Q1,1 2,0"),
            [Point(0, 0), Point(1, 1), Point(2, 0)],
        ),
    ],
)
def test_node_points(shape, expected_points):
    assert shape.node_points() == expected_points
