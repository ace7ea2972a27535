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

"""Primitive commands => skia-pathops Path, for tight bounds."""
import pathops  # pytype: disable=import-error
from typing import Optional, Tuple
from vectorflow.svg_meta import SVGCommandSeq
from vectorflow.svg_transform import Affine2D


# Absolutes coords assumed
# A should never occur because we convert arcs to cubics
_SVG_CMD_TO_SKIA_FN = {
    "M": pathops.Path.moveTo,
    "L": pathops.Path.lineTo,
    "Q": pathops.Path.quadTo,
    "Z": pathops.Path.close,
    "C": pathops.Path.cubicTo,
}


def skia_path(svg_cmds: SVGCommandSeq) -> pathops.Path:
    sk_path = pathops.Path()
    for cmd, args in svg_cmds:
        if cmd not in _SVG_CMD_TO_SKIA_FN:
            raise ValueError(f'No mapping to Skia for "{cmd} {args}"')
        _SVG_CMD_TO_SKIA_FN[cmd](sk_path, *args)
    return sk_path


def bounding_box(
    svg_cmds: SVGCommandSeq, transform: Optional[Affine2D] = None
) -> Tuple[float, float, float, float]:
    """Return tight (xMin, yMin, xMax, yMax), curve extrema included.

    If transform is given, the bounds are those of the mapped outline.
    """
    sk_path = skia_path(svg_cmds)
    if transform is not None:
        sk_path = sk_path.transform(*transform)
    return sk_path.bounds
