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

"""Shapes placed by affine transforms, and groups that move them together.

Nodes live in a Scene and refer to each other by integer id only; a node's
parent is a lookup, never ownership. Every transform maps a node's local
space into its parent's space (the scene, for top-level nodes).

A group edit is replayed from snapshots: each child keeps the transform it
had when the edit began (initial_transform) and receives
initial_transform followed by the anchored delta, so dragging a handle
back and forth never accumulates rounding error.
"""
import dataclasses
import enum
import itertools
from absl import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple
from vectorflow.geometric_types import Point, Rect
from vectorflow.svg_transform import Affine2D
from vectorflow.svg_types import SVGPath, SVGShape


class MembershipState(enum.Enum):
    UNATTACHED = "unattached"
    ATTACHED = "attached"
    DESTROYED = "destroyed"


class Diagnostic(NamedTuple):
    node_id: int
    message: str


@dataclasses.dataclass
class Node:
    id: int
    transform: Affine2D = Affine2D.identity()
    parent: Optional[int] = None
    initial_transform: Optional[Affine2D] = None
    state: MembershipState = MembershipState.UNATTACHED
    transformable: bool = True
    # pivot for transforms; parent space for shapes, group space for groups
    anchor: Optional[Point] = None


@dataclasses.dataclass
class ShapeNode(Node):
    shape: SVGShape = dataclasses.field(default_factory=SVGPath)

    def local_bounds(self, transform: Optional[Affine2D] = None) -> Optional[Rect]:
        """Tight bounds of the shape, mapped by transform if given."""
        geometry = self.shape.as_geometry()
        if not len(geometry):
            return None
        return geometry.bounding_box(transform)

    def apply_transform(self, delta: Affine2D, anchor: Optional[Point] = None):
        """Apply delta about anchor, both expressed in the parent's space.

        The anchor defaults to the node's own anchor, else to the center of
        its bounds in parent space. Successive calls compose.
        """
        if delta == Affine2D.identity():
            return
        if anchor is None:
            anchor = self.anchor
        if anchor is None:
            bounds = self.local_bounds(self.transform)
            anchor = bounds.center() if bounds is not None else Point()
        self.transform = Affine2D.compose_ltr(
            (self.transform, Affine2D.anchored(delta, anchor))
        )


@dataclasses.dataclass
class GroupNode(Node):
    children: List[int] = dataclasses.field(default_factory=list)
    # Last anchored delta of a group edit, in group space; lets a UI draw the
    # selection outline where the children went.
    outline_transform: Affine2D = Affine2D.identity()


def _conjugate(delta: Affine2D, frame: Affine2D) -> Affine2D:
    # delta as seen from inside frame, ignoring frame's translation
    linear = frame.linear()
    return Affine2D.compose_ltr((linear, delta, linear.inverse()))


def _union(rects: Iterable[Optional[Rect]]) -> Optional[Rect]:
    result = None
    for rect in rects:
        if rect is None:
            continue
        result = rect if result is None else result.union(rect)
    return result


class Scene:
    """Arena of nodes addressed by stable integer ids."""

    def __init__(self):
        self._nodes = {}
        self._ids = itertools.count(1)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def __iter__(self):
        return iter(self._nodes.values())

    def node(self, node_id: int) -> Node:
        if node_id not in self._nodes:
            raise KeyError(f"No node {node_id}")
        return self._nodes[node_id]

    def _group(self, group_id: int) -> GroupNode:
        group = self.node(group_id)
        if not isinstance(group, GroupNode):
            raise ValueError(f"Node {group_id} is not a group")
        if group.state == MembershipState.DESTROYED:
            raise ValueError(f"Group {group_id} is destroyed")
        return group

    def add(
        self,
        shape: SVGShape,
        transform: Affine2D = Affine2D.identity(),
        anchor: Optional[Point] = None,
    ) -> int:
        node = ShapeNode(next(self._ids), transform, anchor=anchor, shape=shape)
        self._nodes[node.id] = node
        return node.id

    def add_group(self, transform: Affine2D = Affine2D.identity()) -> int:
        group = GroupNode(next(self._ids), transform)
        self._nodes[group.id] = group
        return group.id

    def children(self, group_id: int) -> Tuple[int, ...]:
        return tuple(self._group(group_id).children)

    def scene_transform(self, node_id: int) -> Affine2D:
        """Transform from node_id's local space to scene space."""
        node = self.node(node_id)
        if node.parent is None or node.parent not in self._nodes:
            return node.transform
        return Affine2D.compose_ltr(
            (node.transform, self.scene_transform(node.parent))
        )

    def _stale_reason(self, group_id: int, child_id: int) -> Optional[str]:
        child = self._nodes.get(child_id)
        if child is None:
            return "missing"
        if child.state == MembershipState.DESTROYED:
            return "destroyed"
        if child.parent != group_id:
            return f"re-parented to {child.parent}"
        if child.initial_transform is None:
            return "has no initial transform"
        return None

    def _valid_children(
        self, group: GroupNode, diagnostics: List[Diagnostic]
    ) -> List[Node]:
        result = []
        for child_id in group.children:
            reason = self._stale_reason(group.id, child_id)
            if reason is not None:
                message = f"Skipping child {child_id} of group {group.id}: {reason}"
                logging.warning(message)
                diagnostics.append(Diagnostic(child_id, message))
                continue
            result.append(self._nodes[child_id])
        return result

    def _bounds(self, node: Node, transform: Affine2D) -> Optional[Rect]:
        """Bounds of node's contents mapped from its local space by transform."""
        if isinstance(node, ShapeNode):
            return node.local_bounds(transform)
        children = [
            self._nodes[child_id]
            for child_id in node.children
            if self._stale_reason(node.id, child_id) is None
        ]
        return _union(
            self._bounds(child, Affine2D.compose_ltr((child.transform, transform)))
            for child in children
        )

    def bounding_box(self, node_id: int) -> Rect:
        """Tight bounds of node_id in scene space; Rect() if it has no geometry."""
        node = self.node(node_id)
        bounds = self._bounds(node, self.scene_transform(node_id))
        return bounds if bounds is not None else Rect()

    def _snapshot_bounds(
        self, children: List[Node], frame: Affine2D
    ) -> Optional[Rect]:
        return _union(
            self._bounds(
                child, Affine2D.compose_ltr((child.initial_transform, frame))
            )
            for child in children
        )

    def apply_transform(
        self, node_id: int, delta: Affine2D, anchor: Optional[Point] = None
    ) -> List[Diagnostic]:
        """Apply delta about anchor, given in scene space.

        Nodes attached to a group are refused; transform their group instead.
        A group replays delta onto every child from its initial_transform.
        """
        node = self.node(node_id)
        diagnostics = []
        if node.state == MembershipState.DESTROYED or not node.transformable:
            message = f"Node {node_id} can't be transformed independently"
            logging.warning(message)
            diagnostics.append(Diagnostic(node_id, message))
            return diagnostics

        if node.parent is not None:
            frame = self.scene_transform(node.parent)
        else:
            frame = Affine2D.identity()
        if isinstance(node, GroupNode):
            frame = Affine2D.compose_ltr((node.transform, frame))
        if frame.is_degenerate():
            message = f"Node {node_id} has a degenerate frame {frame}"
            logging.warning(message)
            diagnostics.append(Diagnostic(node_id, message))
            return diagnostics

        inverse = frame.inverse()
        local_delta = _conjugate(delta, frame)
        local_anchor = inverse.map_point(anchor) if anchor is not None else None

        if isinstance(node, GroupNode):
            self._transform_group(node, local_delta, local_anchor, diagnostics)
        else:
            node.apply_transform(local_delta, local_anchor)
        return diagnostics

    def _transform_group(
        self,
        group: GroupNode,
        delta: Affine2D,
        anchor: Optional[Point],
        diagnostics: List[Diagnostic],
    ):
        children = self._valid_children(group, diagnostics)
        if anchor is None:
            anchor = group.anchor
        if anchor is None:
            frame = self.scene_transform(group.id)
            bounds = self._snapshot_bounds(children, frame)
            if bounds is not None:
                anchor = frame.inverse().map_point(bounds.center())
            else:
                anchor = Point()

        anchored = Affine2D.anchored(delta, anchor)
        for child in children:
            child.transform = Affine2D.compose_ltr((child.initial_transform, anchored))
        group.outline_transform = anchored

    def capture_initial_transforms(self, group_id: int) -> List[Diagnostic]:
        """Snapshot every child's transform; call when an edit ends."""
        group = self._group(group_id)
        diagnostics = []
        for child in self._valid_children(group, diagnostics):
            child.initial_transform = child.transform
        group.outline_transform = Affine2D.identity()
        return diagnostics

    def _attachable(self, node_id: int) -> Node:
        node = self.node(node_id)
        if node.state != MembershipState.UNATTACHED:
            raise ValueError(f"Node {node_id} is {node.state.value}, can't attach")
        return node

    def attach(self, group_id: int, node_id: int):
        group = self._group(group_id)
        node = self._attachable(node_id)
        ancestor_id = group_id
        while ancestor_id is not None:
            if ancestor_id == node_id:
                raise ValueError(f"Node {node_id} would contain itself")
            ancestor_id = self._nodes[ancestor_id].parent

        frame = self.scene_transform(group_id)
        if frame.is_degenerate():
            raise ValueError(f"Group {group_id} has a degenerate frame {frame}")
        # rebase so the node stays put on screen
        node.transform = Affine2D.compose_ltr((node.transform, frame.inverse()))
        node.initial_transform = node.transform
        node.parent = group_id
        node.state = MembershipState.ATTACHED
        node.transformable = False
        group.children.append(node_id)

    def detach(self, node_id: int):
        node = self.node(node_id)
        if node.state != MembershipState.ATTACHED:
            raise ValueError(f"Node {node_id} is {node.state.value}, can't detach")
        node.transform = self.scene_transform(node_id)
        parent = self._nodes.get(node.parent)
        if isinstance(parent, GroupNode) and node_id in parent.children:
            parent.children.remove(node_id)
        node.parent = None
        node.initial_transform = None
        node.state = MembershipState.UNATTACHED
        node.transformable = True

    def destroy(self, node_id: int):
        """Mark node_id (and everything it contains) destroyed.

        Groups holding a destroyed node are left alone; the node shows up as
        stale the next time they are edited.
        """
        node = self.node(node_id)
        if isinstance(node, GroupNode):
            for child_id in node.children:
                child = self._nodes.get(child_id)
                if child is not None and child.parent == node_id:
                    self.destroy(child_id)
        node.state = MembershipState.DESTROYED
        node.transformable = False

    def group(self, node_ids: Iterable[int]) -> int:
        """Create a group at the scene-space bounds origin of node_ids.

        Every id is checked before anything changes; on error the scene is
        left as it was.
        """
        node_ids = list(node_ids)
        if len(set(node_ids)) != len(node_ids):
            raise ValueError(f"Duplicate ids in {node_ids}")
        for node_id in node_ids:
            self._attachable(node_id)
        bounds = _union(
            self._bounds(self.node(node_id), self.scene_transform(node_id))
            for node_id in node_ids
        )
        if bounds is None:
            bounds = Rect()
        group_id = self.add_group(Affine2D.identity().translate(bounds.x, bounds.y))
        for node_id in node_ids:
            self.attach(group_id, node_id)
        return group_id

    def ungroup(self, group_id: int) -> Tuple[List[int], List[Diagnostic]]:
        """Detach every valid child and destroy the group.

        Returns the detached ids, plus a diagnostic for each stale child.
        """
        group = self._group(group_id)
        diagnostics = []
        released = []
        for child in self._valid_children(group, diagnostics):
            self.detach(child.id)
            released.append(child.id)
        group.children.clear()
        if group.state == MembershipState.ATTACHED:
            self.detach(group_id)
        self.destroy(group_id)
        return released, diagnostics
