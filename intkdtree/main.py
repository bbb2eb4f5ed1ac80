from __future__ import annotations

import argparse
import math
import sys
from typing import List

import numpy as np

from intkdtree.errors import KdTreeError
from intkdtree.kdpoint import KdPoint, squared_distance
from intkdtree.kdtree import KdTree

SAMPLE_POINTS = [
    [50, 50],
    [80, 40],
    [10, 60],
    [51, 38],
    [48, 38],
]

SAMPLE_TARGET = [40, 40]


def generate_points(num: int, dims: int, max_value: int, seed: int) -> List[List[int]]:
    """Generate random integer points.

    Args:
        num: Number of points.
        dims: Dimensionality of each point.
        max_value: Coordinates are in [0, max_value).
        seed: Seed for random generator.

    Returns:
        List of points.
    """
    rng = np.random.default_rng(seed)
    return rng.integers(0, max_value, size=(num, dims)).tolist()


def show_plot(points: List[KdPoint], target: KdPoint, nearest: KdPoint):
    """Show points, target and nearest point with matplotlib. Only for 2D."""
    import matplotlib.patches as patches
    import matplotlib.pyplot as plt

    radius = math.sqrt(squared_distance(nearest, target))

    c = patches.Circle(
        (target.get(0), target.get(1)),
        radius=radius,
        edgecolor="green",
        facecolor="none",
        linewidth=1,
    )
    ax = plt.axes()
    ax.add_patch(c)

    plt.scatter([p.get(0) for p in points], [p.get(1) for p in points])
    plt.scatter(target.get(0), target.get(1))
    plt.scatter(nearest.get(0), nearest.get(1))
    plt.axis("square")
    plt.show()


def log_rerun(points: List[KdPoint], target: KdPoint, nearest: KdPoint):
    """Send points, target and nearest point to rerun viewer. Only for 2D or 3D."""
    import rerun as rr

    positions = np.array([p.as_array() for p in points] + [target.as_array()])

    colors = np.full((len(points), 3), [0, 255, 0])
    for i, p in enumerate(points):
        if p == nearest:
            colors[i] = [0, 0, 255]
    colors = np.append(colors, np.array([255, 0, 0]).reshape(1, 3), axis=0)

    rr.init("knn", spawn=True)
    if target.dimensionality() == 2:
        rr.log("points", rr.Points2D(positions, colors=colors, radii=0.5))
    else:
        rr.log("points", rr.Points3D(positions, colors=colors, radii=0.5))


def run(args: argparse.Namespace):
    if args.random > 0:
        points = generate_points(args.random, args.dims, args.max, args.seed)
        dims = args.dims
    else:
        points = SAMPLE_POINTS
        dims = len(SAMPLE_POINTS[0])

    if args.target:
        target = KdPoint.of(args.target)
    elif args.random > 0:
        target = KdPoint.of(generate_points(1, dims, args.max, args.seed + 1)[0])
    else:
        target = KdPoint.of(SAMPLE_TARGET)

    tree = KdTree(dims)
    for point in points:
        tree.insert(point)

    tree.print_tree()

    nearest = tree.nearest_neighbor(target)
    if nearest is None:
        print("Tree is empty")
        return

    print(f"Nearest Neighbor: {nearest.point}")
    print(f"Squared distance: {squared_distance(nearest.point, target)}")

    stored = list(tree)
    if args.plot:
        if dims != 2:
            print("Plot is supported only for 2D")
        else:
            show_plot(stored, target, nearest.point)
    if args.rerun:
        if dims not in (2, 3):
            print("Rerun is supported only for 2D or 3D")
        else:
            log_rerun(stored, target, nearest.point)


def main():
    # NOTE:
    # e.g.
    # python3 -m intkdtree.main --random 100 --dims 2 --target 10 20 --plot
    parser = argparse.ArgumentParser(description="Nearest neighbor search by kd-tree")
    parser.add_argument(
        "-t",
        "--target",
        nargs="*",
        type=int,
        help="Target point to search nearest neighbor",
        default=[],
    )
    parser.add_argument(
        "-r",
        "--random",
        type=int,
        help="Number of random points. If 0, sample points are used",
        default=0,
    )
    parser.add_argument(
        "-d", "--dims", type=int, help="Dimension of random points", default=2
    )
    parser.add_argument(
        "-m", "--max", type=int, help="Max value of random coordinates", default=100
    )
    parser.add_argument("-s", "--seed", type=int, help="Random seed", default=19)
    parser.add_argument("--plot", action="store_true", help="Plot with matplotlib")
    parser.add_argument("--rerun", action="store_true", help="Show with rerun viewer")
    args = parser.parse_args()

    if args.dims < 1 or args.max < 1:
        print("--dims and --max need to be positive")
        sys.exit(1)

    try:
        run(args)
    except KdTreeError as err:
        print(f"{err}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == "__main__":
    main()
