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

"""Normalize svg path data to absolute commands.

Usage:
vectorflow.py drawing.svg
vectorflow.py --arcs_to_cubics --transform="rotate(90)" "m10,10 h5 a5,5 0 0 1 5,5"
<one line of absolute path data per path dumped to stdout>
"""
from absl import app
from absl import flags
from lxml import etree  # pytype: disable=import-error
from typing import Iterable, Iterator, List, Tuple
from vectorflow.path_parser import parse_path
from vectorflow.svg_meta import strip_ns
from vectorflow.svg_transform import Affine2D, parse_svg_transform


FLAGS = flags.FLAGS


flags.DEFINE_bool(
    "arcs_to_cubics", False, "Whether to replace elliptical arcs by cubic curves"
)
flags.DEFINE_string(
    "transform", "", "Extra svg transform applied after each path's own"
)
flags.DEFINE_string("output_file", "-", "Output file ('-' means stdout)")


def iter_svg_paths(tree: etree.ElementTree) -> Iterator[Tuple[str, Affine2D]]:
    """Yields (d, transform) for every <path>, ancestors' transforms included."""
    for el in tree.iter("*"):
        if strip_ns(el.tag) != "path":
            continue
        transform = Affine2D.identity()
        node = el
        while node is not None:
            transform = Affine2D.compose_ltr(
                (transform, parse_svg_transform(node.attrib.get("transform", "")))
            )
            node = node.getparent()
        yield el.attrib.get("d", ""), transform


def normalize(
    paths: Iterable[Tuple[str, Affine2D]],
    extra_transform: Affine2D = Affine2D.identity(),
    arcs_to_cubics: bool = False,
) -> List[str]:
    result = []
    for d, transform in paths:
        geometry = parse_path(d, arcs_to_cubics=arcs_to_cubics)
        transform = Affine2D.compose_ltr((transform, extra_transform))
        if transform != Affine2D.identity():
            geometry = geometry.transform(transform)
        result.append(geometry.tostring())
    return result


def _run(argv):
    if len(argv) != 2:
        raise app.UsageError("Expected exactly one svg file or path data string")
    input_arg = argv[1]

    if input_arg.lower().endswith(".svg"):
        paths = list(iter_svg_paths(etree.parse(input_arg)))
    else:
        paths = [(input_arg, Affine2D.identity())]

    lines = normalize(
        paths,
        extra_transform=parse_svg_transform(FLAGS.transform),
        arcs_to_cubics=FLAGS.arcs_to_cubics,
    )
    output = "\n".join(lines)

    if FLAGS.output_file == "-":
        print(output)
    else:
        with open(FLAGS.output_file, "w") as f:
            f.write(output + "\n")


def main(argv=None):
    # We don't seem to be __main__ when run as cli tool installed by setuptools
    app.run(_run, argv=argv)


if __name__ == "__main__":
    main()
