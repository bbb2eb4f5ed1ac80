from __future__ import annotations


class KdTreeError(ValueError):
    """Base class for errors raised by the kd-tree."""


class InvalidPointError(KdTreeError):
    """Raised when an input can not be converted to an integer point."""


class EmptyConstructionInputError(KdTreeError):
    """Raised when a tree is seeded from an empty point collection."""

    def __init__(self):
        super().__init__("Can not build a tree from an empty point collection")


class DimensionMismatchError(KdTreeError):
    """Raised when a point length differs from the tree dimensionality.

    Args:
        expected: Dimensionality of the tree.
        actual: Dimensionality of the rejected point.
    """

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Dimension mismatch: tree has {expected} dimension(s), point has {actual}"
        )
        self.expected = expected
        self.actual = actual
