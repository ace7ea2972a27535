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

from lxml import etree
import pytest
from vectorflow.svg_transform import Affine2D
from vectorflow.vectorflow import iter_svg_paths, normalize


def _svg_tree(*els):
    root = etree.fromstring(
        '<svg version="1.1" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 128 128"/>'
    )
    for el in els:
        root.append(etree.fromstring(el))
    return etree.ElementTree(root)


def test_iter_svg_paths():
    tree = _svg_tree(
        '<path d="M0,0 L1,1"/>',
        '<g xmlns="http://www.w3.org/2000/svg" transform="translate(10)">'
        '<path d="m1,1 h1" transform="scale(2)"/></g>',
        '<rect xmlns="http://www.w3.org/2000/svg" width="1" height="1"/>',
    )
    paths = list(iter_svg_paths(tree))
    assert [d for d, _ in paths] == ["M0,0 L1,1", "m1,1 h1"]
    assert paths[0][1] == Affine2D.identity()
    # own transform first, then the group's
    assert paths[1][1].map_point((1, 1)) == (12, 2)


@pytest.mark.parametrize(
    "paths, extra_transform, arcs_to_cubics, expected",
    [
        (
            [("m1,1 2,0 z", Affine2D.identity())],
            Affine2D.identity(),
            False,
            ["M1,1 L3,1 Z"],
        ),
        (
            [("M1,1 L2,2", Affine2D.identity().translate(1, 1))],
            Affine2D.identity().scale(2),
            False,
            ["M4,4 L6,6"],
        ),
        (
            [("M0,0 A5,5 0 0 1 10,0", Affine2D.identity())],
            Affine2D.identity(),
            False,
            ["M0,0 A5 5 0 0 1 10,0"],
        ),
        ([("", Affine2D.identity())], Affine2D.identity(), False, [""]),
    ],
)
def test_normalize(paths, extra_transform, arcs_to_cubics, expected):
    assert normalize(paths, extra_transform, arcs_to_cubics) == expected


def test_normalize_arcs_to_cubics():
    (result,) = normalize(
        [("M0,0 A5,5 0 0 1 10,0", Affine2D.identity())], arcs_to_cubics=True
    )
    assert result.startswith("M0,0 C")
    assert result.count("C") == 2
    assert result.endswith(" 10,0")
