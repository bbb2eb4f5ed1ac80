from __future__ import annotations

from dataclasses import dataclass

from intkdtree.kdpoint import KdPoint


@dataclass(eq=False)
class KdTreeNode:
    point: KdPoint
    left_child: KdTreeNode | None = None
    right_child: KdTreeNode | None = None

    def is_leaf(self) -> bool:
        return self.left_child is None and self.right_child is None
