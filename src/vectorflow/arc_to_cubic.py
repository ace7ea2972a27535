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

"""Convert SVG Path's elliptical arcs to center form and to Bezier curves.

Endpoint to center conversion follows the SVG implementation notes:
https://www.w3.org/TR/SVG/implnote.html#ArcConversionEndpointToCenter

Cubic subdivision is adapted from FontTools fontTools/svgLib/path/arc.py, which
in turn is adapted from Blink's SVGPathNormalizer::DecomposeArcToCubic:
https://github.com/chromium/chromium/blob/93831f2/third_party/blink/renderer/core/svg/svg_path_parser.cc#L169-L278
"""
from math import atan2, fabs, hypot, isfinite, pi, radians, sqrt
from typing import Iterator, NamedTuple, Optional, Tuple, Union
from vectorflow.geometric_types import (
    DEFAULT_ALMOST_EQUAL_TOLERANCE,
    Point,
    Vector,
)
from vectorflow.path_geometry import ArcTo, LineTo
from vectorflow.svg_transform import Affine2D


TWO_PI = 2 * pi


class CenterParametrization(NamedTuple):
    theta1: float
    theta_arc: float
    center_point: Point


class EllipticalArc(NamedTuple):
    start_point: Point
    rx: float
    ry: float
    rotation: float
    large: int
    sweep: int
    end_point: Point

    def is_straight_line(self) -> bool:
        # If rx = 0 or ry = 0 then this arc is treated as a straight line segment (a
        # "lineto") joining the endpoints.
        # http://www.w3.org/TR/SVG/implnote.html#ArcOutOfRangeParameters
        rx = fabs(self.rx)
        ry = fabs(self.ry)
        if not (rx and ry):
            return True
        return False

    def is_zero_length(self, tolerance=DEFAULT_ALMOST_EQUAL_TOLERANCE) -> bool:
        return self.end_point.almost_equals(self.start_point, tolerance)

    def _transformed_mid_point(self) -> Vector:
        # (x1', y1'): half the chord, rotated into the ellipse's own frame
        mid_point_distance = (self.start_point - self.end_point) * 0.5

        # SVG rotation is expressed in degrees, whereas Affin2D.rotate uses radians
        angle = radians(self.rotation)
        point_transform = Affine2D.identity().rotate(-angle)
        return point_transform.map_vector(mid_point_distance)

    def _normalized_mid_point(self) -> Vector:
        # (x1'/rx, y1'/ry)
        x1, y1 = self._transformed_mid_point()
        return Vector(x1 / self.rx, y1 / self.ry)

    def radii_scale(self) -> float:
        """Return sqrt(lambda); the radii are too small to reach end_point if > 1."""
        return hypot(*self._normalized_mid_point())

    def correct_out_of_range_radii(self) -> "EllipticalArc":
        # Check if the radii are big enough to draw the arc, scale radii if not.
        # http://www.w3.org/TR/SVG/implnote.html#ArcCorrectionOutOfRangeRadii
        if self.is_straight_line() or self.is_zero_length():
            return self

        arc = self._replace(rx=fabs(self.rx), ry=fabs(self.ry))
        radii_scale = arc.radii_scale()
        if radii_scale > 1:
            return arc._replace(rx=arc.rx * radii_scale, ry=arc.ry * radii_scale)
        return arc

    # https://www.w3.org/TR/SVG/implnote.html#ArcConversionEndpointToCenter
    def end_to_center_parametrization(self) -> CenterParametrization:
        """Center and angles for an arc whose radii are already in range.

        Evaluated in radius-normalized coordinates, where no term exceeds 1.
        """
        if self.is_straight_line() or self.is_zero_length():
            raise ValueError(f"Can't compute center parametrization for {self}")

        angle = radians(self.rotation)
        rx, ry = self.rx, self.ry
        u, v = self._normalized_mid_point()
        norm = hypot(u, v)
        if not norm:
            raise ValueError(f"Can't compute center parametrization for {self}")
        u_dir, v_dir = u / norm, v / norm

        # F.6.5.2; clamped at 0 as rescaled radii put us right on the boundary
        scale_factor = sqrt(max(1 - norm * norm, 0.0))
        if self.large == self.sweep:
            scale_factor = -scale_factor
        center_prime = Vector(scale_factor * v_dir * rx, -scale_factor * u_dir * ry)

        # F.6.5.3
        mid_point = self.start_point + (self.end_point - self.start_point) * 0.5
        center_point = mid_point + Affine2D.identity().rotate(angle).map_vector(
            center_prime
        )

        # F.6.5.5, F.6.5.6
        v1 = Vector(u - scale_factor * v_dir, v + scale_factor * u_dir)
        v2 = Vector(-u - scale_factor * v_dir, -v + scale_factor * u_dir)
        theta1 = atan2(v1.y, v1.x)
        theta_arc = atan2(v1.x * v2.y - v1.y * v2.x, v1.dot(v2))
        if theta_arc < 0 and self.sweep:
            theta_arc += TWO_PI
        elif theta_arc > 0 and not self.sweep:
            theta_arc -= TWO_PI

        return CenterParametrization(theta1, theta_arc, center_point)

    def to_center_form(self) -> ArcTo:
        arc = self.correct_out_of_range_radii()
        arc_params = arc.end_to_center_parametrization()
        return ArcTo(
            center=arc_params.center_point,
            rx=arc.rx,
            ry=arc.ry,
            rotation=arc.rotation,
            start_angle=arc_params.theta1,
            sweep_angle=arc_params.theta_arc,
            end=arc.end_point,
        )


def arc_to(
    start_point: Tuple[float, float],
    rx: float,
    ry: float,
    rotation: float,
    large: int,
    sweep: int,
    end_point: Tuple[float, float],
) -> Union[LineTo, ArcTo, None]:
    """Resolve an endpoint-parameterized arc into a single primitive.

    Returns LineTo(end_point) if either radius is 0 (or any parameter, or the
    resulting center form, is not finite), None if the arc has zero length,
    and the center form otherwise. Radii too small to span the endpoints are
    scaled up; negative radii are taken by magnitude.
    """
    start_point = Point(*start_point)
    end_point = Point(*end_point)
    if not all(isfinite(v) for v in (*start_point, *end_point)):
        return None
    if not all(isfinite(v) for v in (rx, ry, rotation)):
        return LineTo(end_point)

    arc = EllipticalArc(
        start_point, rx, ry, rotation, int(bool(large)), int(bool(sweep)), end_point
    )
    if arc.is_straight_line():
        return LineTo(end_point)
    if arc.is_zero_length():
        return None
    corrected = arc.correct_out_of_range_radii()
    if not (
        isfinite(corrected.rx) and isfinite(corrected.ry) and corrected.radii_scale()
    ):
        # radii beyond float range, or a chord that vanishes next to them
        return LineTo(end_point)

    center_form = arc.to_center_form()
    if not all(
        isfinite(v)
        for v in (
            *center_form.center,
            center_form.rx,
            center_form.ry,
            center_form.start_angle,
            center_form.sweep_angle,
        )
    ):
        return LineTo(end_point)
    return center_form


def arc_to_cubic(
    start_point: Tuple[float, float],
    rx: float,
    ry: float,
    rotation: float,
    large: int,
    sweep: int,
    end_point: Tuple[float, float],
) -> Iterator[Tuple[Optional[Point], Optional[Point], Point]]:
    """Convert arc to cubic(s).

    start/end point are (x,y) tuples with absolute coordinates.

    Yields 3-tuples of Points for each Cubic bezier, i.e. two off-curve points and
    one on-curve end point.

    If either rx or ry is 0, the arc is treated as a straight line joining the end
    points, and a (None, None, arc.end_point) tuple is yielded.

    Yields empty iterator if arc has zero length.
    """
    primitive = arc_to(start_point, rx, ry, rotation, large, sweep, end_point)
    if primitive is None:
        return
    elif isinstance(primitive, LineTo):
        yield None, None, primitive.point
    else:
        for cubic in primitive.to_cubics():
            yield cubic.c1, cubic.c2, cubic.end
