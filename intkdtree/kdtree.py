from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator

from intkdtree.errors import DimensionMismatchError, EmptyConstructionInputError
from intkdtree.kdpoint import KdPoint, PointLike, axis_of, squared_distance
from intkdtree.kdtree_node import KdTreeNode

# Search stages of a frame.
_DESCEND = 0
_NEAR_SEARCHED = 1
_FAR_SEARCHED = 2


@dataclass
class _SearchFrame:
    node: KdTreeNode
    depth: int
    stage: int = _DESCEND
    far_child: KdTreeNode | None = None
    best: KdTreeNode | None = None


def _closest(
    candidate: KdTreeNode | None, incumbent: KdTreeNode | None, target: KdPoint
) -> KdTreeNode | None:
    """Choose the node which is closer to target.

    Args:
        candidate: Node found newly. Can be None.
        incumbent: Node found before. Can be None.
        target: Query point.

    Returns:
        Candidate only if it is strictly closer. Otherwise, incumbent.
    """
    if candidate is None:
        return incumbent
    if incumbent is None:
        return candidate

    d0 = squared_distance(candidate.point, target)
    d1 = squared_distance(incumbent.point, target)
    return candidate if d0 < d1 else incumbent


class KdTree:
    """Binary space partition of integer points built by insertion order.

    Args:
        dimensionality: Number of coordinates of the points. If None, it is
            decided by the first inserted point.
    """

    def __init__(self, dimensionality: int | None = None):
        if dimensionality is not None and dimensionality < 1:
            raise ValueError(f"Dimensionality must be positive: {dimensionality}")
        self._dimensionality = dimensionality
        self._root: KdTreeNode | None = None
        self._size = 0

    @staticmethod
    def from_points(points: Iterable[PointLike]) -> KdTree:
        """Create tree seeded from points.

        The first point becomes the root and the rest are inserted in order.

        Args:
            points: Non-empty collection of points which have the same dimensionality.

        Returns:
            Created tree.
        """
        points_list = [KdPoint.of(p) for p in points]
        if len(points_list) == 0:
            raise EmptyConstructionInputError()

        tree = KdTree(points_list[0].dimensionality())
        for point in points_list:
            tree.insert(point)
        return tree

    @property
    def dimensionality(self) -> int | None:
        return self._dimensionality

    @property
    def root(self) -> KdTreeNode | None:
        return self._root

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[KdPoint]:
        for node in self.traverse():
            if node is not None:
                yield node.point

    def _validate(self, values: PointLike) -> KdPoint:
        point = KdPoint.of(values)
        if self._dimensionality is not None and (
            point.dimensionality() != self._dimensionality
        ):
            raise DimensionMismatchError(self._dimensionality, point.dimensionality())
        return point

    def insert(self, values: PointLike) -> KdTreeNode:
        """Insert point into tree.

        Args:
            values: Point to be inserted.

        Returns:
            Node which is created for the point.
        """
        point = self._validate(values)
        new_node = KdTreeNode(point=point)

        if self._root is None:
            self._dimensionality = point.dimensionality()
            self._root = new_node
            self._size = 1
            return new_node

        node = self._root
        depth = 0
        while True:
            # Only strictly less goes to left. Equal value goes to right.
            if point.get(depth) < node.point.get(depth):
                if node.left_child is None:
                    node.left_child = new_node
                    break
                node = node.left_child
            else:
                if node.right_child is None:
                    node.right_child = new_node
                    break
                node = node.right_child
            depth += 1

        self._size += 1
        return new_node

    def nearest_neighbor(self, values: PointLike) -> KdTreeNode | None:
        """Search the node which is the nearest to target.

        Args:
            values: Target point.

        Returns:
            Node in the tree which has the minimum squared distance to target.
            If tree is empty, returns None.
        """
        target = self._validate(values)
        if self._root is None:
            return None

        dim = self._dimensionality

        # NOTE
        # This is the same as descending to the near child recursively and backtracking
        # to the far child. Explicit stack is used to avoid too deep recursion.
        stack = [_SearchFrame(node=self._root, depth=0)]
        returned: KdTreeNode | None = None

        while stack:
            frame = stack[-1]
            node = frame.node
            axis = axis_of(frame.depth, dim)

            if frame.stage == _DESCEND:
                if target.get(axis) < node.point.get(axis):
                    near_child, frame.far_child = node.left_child, node.right_child
                else:
                    near_child, frame.far_child = node.right_child, node.left_child

                frame.stage = _NEAR_SEARCHED
                if near_child is not None:
                    stack.append(_SearchFrame(node=near_child, depth=frame.depth + 1))
                    continue
                returned = None

            if frame.stage == _NEAR_SEARCHED:
                frame.best = _closest(returned, node, target)

                radius2 = squared_distance(frame.best.point, target)
                delta = target.get(axis) - node.point.get(axis)

                frame.stage = _FAR_SEARCHED
                # Far side can have closer point only if the sphere crosses the splitting plane.
                if radius2 >= delta * delta and frame.far_child is not None:
                    stack.append(
                        _SearchFrame(node=frame.far_child, depth=frame.depth + 1)
                    )
                    continue
                returned = None

            frame.best = _closest(returned, frame.best, target)
            stack.pop()
            returned = frame.best

        return returned

    def traverse(self) -> Iterator[KdTreeNode | None]:
        """Enumerate nodes in level order.

        Missing children of existing nodes are enumerated as None.

        Returns:
            New generator for each call.
        """
        for level in self.levels():
            yield from level

    def levels(self) -> Iterator[list[KdTreeNode | None]]:
        """Enumerate nodes level by level.

        Returns:
            Generator of list per level. Missing children are stored as None.
        """
        queue: deque[KdTreeNode | None] = deque([self._root])

        while queue:
            level = [queue.popleft() for _ in range(len(queue))]
            for node in level:
                if node is not None:
                    queue.append(node.left_child)
                    queue.append(node.right_child)
            yield level

    def format_tree(self) -> list[str]:
        lines = []
        for level in self.levels():
            entries = [
                "null"
                if node is None
                else "(point: " + "".join(f"{v} " for v in node.point) + ")"
                for node in level
            ]
            lines.append(", ".join(entries))
        return lines

    def print_tree(self):
        for line in self.format_tree():
            print(line)
