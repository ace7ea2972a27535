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

"""Tokenize svg path data into (command, args) tuples.

Path data in the wild is frequently hand edited or produced by buggy tools,
so nothing in here raises: characters that can't be read are skipped and
argument groups cut short by the end of input are dropped.
"""
import math
import re
from absl import logging
from typing import Generator, Iterator, List, Optional, Tuple
from vectorflow import svg_meta

_CMD_CHARS = frozenset(svg_meta.cmds())
_SEPARATOR_RE = re.compile(r"[\s,]+")
_FLOAT_RE = re.compile(
    r"[-+]?"  # optional sign
    r"(?:"
    r"[0-9]+(?:\.[0-9]*)?"  # int or float, trailing dot allowed (e.g. '5.')
    r"|"
    r"\.[0-9]+"  # float with leading dot (e.g. '.42')
    r")"
    r"(?:[eE][-+]?[0-9]+)?"  # optional scientific notiation
)
_FLAG_RE = re.compile("[01]")

# https://www.w3.org/TR/SVG11/paths.html#PathDataMovetoCommands
# If a moveto is followed by multiple pairs of coordinates,
# the subsequent pairs are treated as implicit lineto commands
_IMPLICIT_REPEAT_CMD = {"m": "l", "M": "L"}


def _read_number(
    text: str, pos: int, flag: bool = False
) -> Tuple[Optional[float], int]:
    """Read one number at pos, returning (value, next_pos).

    value is None if nothing usable starts at pos. Arc flags are a single
    '0' or '1' so that "0016" reads as 0, 0, 16; anything else in a flag slot
    is read as a regular number and coerced by non-zero-ness.
    """
    if flag:
        m = _FLAG_RE.match(text, pos)
        if m:
            return float(m.group()), m.end()
    m = _FLOAT_RE.match(text, pos)
    if not m:
        return None, pos
    value = float(m.group())
    if not math.isfinite(value):
        # e.g. 1e999; swallow the literal but don't let inf into geometry
        return None, m.end()
    if flag:
        value = float(value != 0)
    return value, m.end()


def parse_numbers(text: str) -> Iterator[float]:
    """Yields every number in text, skipping anything unreadable."""
    pos = 0
    while pos < len(text):
        m = _SEPARATOR_RE.match(text, pos)
        if m:
            pos = m.end()
            continue
        value, end = _read_number(text, pos)
        if end == pos:
            pos += 1
            continue
        pos = end
        if value is not None:
            yield value


def _scan(svg_path: str) -> Generator[Tuple[str, Tuple[float, ...]], None, None]:
    """Yields (cmd, args) for every known command letter, args ungrouped."""
    cmd = None
    args: List[float] = []
    skipped = 0
    pos = 0
    while pos < len(svg_path):
        m = _SEPARATOR_RE.match(svg_path, pos)
        if m:
            pos = m.end()
            continue

        char = svg_path[pos]
        if char in _CMD_CHARS:
            if cmd is not None:
                yield cmd, tuple(args)
            cmd, args = char, []
            pos += 1
            continue
        if char.isalpha():
            # unknown command; its arguments go nowhere
            if cmd is not None:
                yield cmd, tuple(args)
            cmd, args = None, []
            skipped += 1
            pos += 1
            continue

        flag = (
            cmd in ("A", "a")
            and len(args) % svg_meta.num_args(cmd) in svg_meta.ARC_FLAG_IDXS
        )
        value, end = _read_number(svg_path, pos, flag)
        if end == pos:
            # stray character, e.g. a lone '.' or '-'
            skipped += 1
            pos += 1
            continue
        pos = end
        if value is None or cmd is None:
            skipped += 1
            continue
        args.append(value)

    if cmd is not None:
        yield cmd, tuple(args)
    if skipped:
        logging.debug("Skipped %d malformed tokens in %.40r", skipped, svg_path)


def _explode_cmd(args_per_cmd, cmd, args):
    cmds = []
    for i in range(len(args) // args_per_cmd):
        if i > 0:
            cmd = _IMPLICIT_REPEAT_CMD.get(cmd, cmd)
        cmds.append((cmd, tuple(args[i * args_per_cmd : (i + 1) * args_per_cmd])))
    return cmds


def parse_svg_path(
    svg_path: str, exploded: bool = True
) -> Generator[Tuple[str, Tuple[float, ...]], None, None]:
    """Parses an svg path.

    Exploded means when params repeat each the command is reported as
    if multiplied. For example "M1,1 2,2 3,3" would report as three
    separate steps when exploded, the latter two as "L".

    Arguments that don't fill a complete group for their command are
    dropped, as are any arguments given to "Z".

    Yields tuples of (cmd, (args))."""
    for cmd, args in _scan(svg_path):
        args_per_cmd = svg_meta.num_args(cmd)
        if args_per_cmd == 0:
            yield cmd, ()
            continue
        usable = len(args) - len(args) % args_per_cmd
        if not usable:
            continue
        args = args[:usable]
        if exploded:
            yield from _explode_cmd(args_per_cmd, cmd, args)
        else:
            yield cmd, args
