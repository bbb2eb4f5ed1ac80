from intkdtree.errors import (
    DimensionMismatchError,
    EmptyConstructionInputError,
    InvalidPointError,
    KdTreeError,
)
from intkdtree.kdpoint import KdPoint, axis_of, squared_distance
from intkdtree.kdtree import KdTree
from intkdtree.kdtree_node import KdTreeNode

__all__ = [
    "DimensionMismatchError",
    "EmptyConstructionInputError",
    "InvalidPointError",
    "KdPoint",
    "KdTree",
    "KdTreeError",
    "KdTreeNode",
    "axis_of",
    "squared_distance",
]
