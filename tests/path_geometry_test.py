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
from vectorflow.path_geometry import (
    ArcTo,
    Close,
    CubicTo,
    LineTo,
    MoveTo,
    NodeKind,
    PathGeometry,
    QuadTo,
)
from vectorflow.path_parser import parse_path
from vectorflow.svg_transform import Affine2D


def test_control_points_and_kinds():
    geometry = parse_path("M0,0 L1,1 C2,2 3,3 4,4 Q5,5 6,6 A1,1 0 0 1 8,6 Z")
    assert geometry.control_points() == [
        Point(0, 0),
        Point(1, 1),
        Point(2, 2),
        Point(3, 3),
        Point(4, 4),
        Point(5, 5),
        Point(6, 6),
        Point(8, 6),
    ]
    assert geometry.control_point_kinds() == [
        NodeKind.MOVE,
        NodeKind.LINE,
        NodeKind.CONTROL,
        NodeKind.CONTROL,
        NodeKind.CURVE,
        NodeKind.CONTROL,
        NodeKind.CURVE,
        NodeKind.ARC,
    ]


def test_end_points():
    assert MoveTo(Point(1, 2)).end_point() == Point(1, 2)
    assert CubicTo(Point(0, 0), Point(1, 1), Point(2, 3)).end_point() == Point(2, 3)
    assert QuadTo(Point(0, 0), Point(4, 5)).end_point() == Point(4, 5)
    assert Close().end_point() is None


def test_primitives_compare_by_kind():
    assert MoveTo(Point(1, 2)) != LineTo(Point(1, 2))
    assert LineTo(Point(1, 2)) == LineTo(Point(1.0, 2.0))


def test_append_only_sequence():
    geometry = PathGeometry()
    assert len(geometry) == 0
    geometry.append(MoveTo(Point(0, 0)))
    geometry.append(LineTo(Point(1, 0)))
    assert len(geometry) == 2
    assert list(geometry) == [MoveTo(Point(0, 0)), LineTo(Point(1, 0))]
    assert geometry == PathGeometry([MoveTo(Point(0, 0)), LineTo(Point(1, 0))])


@pytest.mark.parametrize(
    "d, expected",
    [
        ("M0,0 L10,10 C1,1 2,2 3,3 Z", "M0,0 L10,10 C1,1 2,2 3,3 Z"),
        ("m1,1 h2 v2 z", "M1,1 L3,1 L3,3 Z"),
        ("M0,0 Q1,1 2,0 T4,0", "M0,0 Q1,1 2,0 Q3,-1 4,0"),
        ("M0,0 A5,5 0 0 1 10,0", "M0,0 A5 5 0 0 1 10,0"),
        ("", ""),
    ],
)
def test_tostring(d, expected):
    assert parse_path(d).tostring() == expected


def test_arcs_to_cubics():
    geometry = parse_path("M0,0 A5,5 0 0 1 10,0 L10,10")
    converted = geometry.arcs_to_cubics()
    assert [type(prim) for prim in converted] == [
        MoveTo,
        CubicTo,
        CubicTo,
        LineTo,
    ]
    assert converted == parse_path("M0,0 A5,5 0 0 1 10,0 L10,10", arcs_to_cubics=True)
    # the original is untouched
    assert isinstance(geometry[1], ArcTo)


def test_transform():
    geometry = parse_path("M0,0 L10,0 Q10,10 0,10 Z")
    transformed = geometry.transform(Affine2D.identity().translate(5, 5).scale(2))
    assert transformed == [
        MoveTo(Point(5, 5)),
        LineTo(Point(25, 5)),
        QuadTo(Point(25, 25), Point(5, 25)),
        Close(),
    ]


def test_transform_arc():
    transformed = parse_path("M0,0 A5,5 0 0 1 10,0").transform(
        Affine2D.identity().scale(1, 2)
    )
    assert not any(isinstance(prim, ArcTo) for prim in transformed)
    assert transformed[-1].end == Point(10, 0)


@pytest.mark.parametrize(
    "d, transform, expected",
    [
        ("M0,0 L10,0 L10,5 Z", None, Rect(0, 0, 10, 5)),
        ("M1,1 L4,5", None, Rect(1, 1, 3, 4)),
        # control points outside the curve don't count
        ("M0,0 C0,10 10,10 10,0", None, Rect(0, 0, 10, 7.5)),
        (
            "M0,0 L10,0 L10,5 Z",
            Affine2D.identity().translate(1, 2).scale(2),
            Rect(1, 2, 20, 10),
        ),
        # full circle of radius 5 around (5, 5)
        ("M10,5 A5,5 0 1 1 0,5 A5,5 0 1 1 10,5 Z", None, Rect(0, 0, 10, 10)),
        ("", None, Rect()),
    ],
)
def test_bounding_box(d, transform, expected):
    assert parse_path(d).bounding_box(transform) == pytest.approx(expected, abs=1e-2)


def test_as_cmd_seq():
    assert list(parse_path("M0,0 h1 Z").as_cmd_seq()) == [
        ("M", (0, 0)),
        ("L", (1, 0)),
        ("Z", ()),
    ]
