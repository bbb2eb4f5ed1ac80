from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Union

import numpy as np
import numpy.typing as npt

from intkdtree.errors import DimensionMismatchError, InvalidPointError


def axis_of(depth: int, dimensionality: int) -> int:
    """Decide which axis is used for splitting at the specified depth.

    Args:
        depth: Depth in the tree. Root is 0.
        dimensionality: Number of coordinates of the points.

    Returns:
        Axis index which cycles through 0..dimensionality-1.
    """
    if dimensionality < 1:
        raise ValueError(f"Dimensionality must be positive: {dimensionality}")
    if depth < 0:
        raise ValueError(f"Depth must not be negative: {depth}")
    return depth % dimensionality


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(
        value, (bool, np.bool_)
    )


@dataclass(frozen=True)
class KdPoint:
    coordinates: tuple[int, ...]

    @staticmethod
    def of(values: PointLike) -> KdPoint:
        """Create point from any one-dimensional integer sequence.

        Args:
            values: List, tuple, integer NDArray or KdPoint.

        Returns:
            Point which holds the values as python int.
        """
        if isinstance(values, KdPoint):
            return values

        # Accept any list type by converting NDArray.
        array = np.asarray(values)
        if array.ndim != 1:
            raise InvalidPointError(
                f"Point must be one-dimensional sequence, but shape is {array.shape}"
            )
        if array.size == 0:
            raise InvalidPointError("Point must have at least one coordinate")
        # NOTE
        # Integers which do not fit into int64 make object array.
        if array.dtype == np.object_ and all(_is_int(v) for v in array.tolist()):
            return KdPoint(tuple(int(v) for v in array.tolist()))
        if not np.issubdtype(array.dtype, np.integer):
            raise InvalidPointError(
                f"Point coordinates must be integers, but dtype is {array.dtype}"
            )

        # Convert to python int so that distance never overflows.
        return KdPoint(tuple(int(v) for v in array.tolist()))

    def get(self, depth: int) -> int:
        return self.coordinates[axis_of(depth, len(self.coordinates))]

    def dimensionality(self) -> int:
        return len(self.coordinates)

    def as_array(self) -> npt.NDArray[np.int64]:
        return np.array(self.coordinates, dtype=np.int64)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self) -> Iterator[int]:
        return iter(self.coordinates)

    def __str__(self) -> str:
        return "(" + " ".join(str(v) for v in self.coordinates) + " )"


PointLike = Union[KdPoint, Sequence[int], npt.NDArray[np.integer]]


def squared_distance(p0: KdPoint, p1: KdPoint) -> int:
    """Compute squared euclidean distance between points.

    Args:
        p0: Point.
        p1: Point which has the same dimensionality as p0.

    Returns:
        Sum of squared difference of all coordinates.
    """
    if len(p0) != len(p1):
        raise DimensionMismatchError(len(p0), len(p1))

    total = 0
    for a, b in zip(p0.coordinates, p1.coordinates):
        diff = a - b
        total += diff * diff
    return total
