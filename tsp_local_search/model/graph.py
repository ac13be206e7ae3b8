"""Distance graph data structure for the symmetric TSP."""

import random
from typing import List, Optional, Sequence

import numpy as np

from .errors import InvalidGraph, InvalidTour, IndexOutOfRange

Tour = List[int]


def _node_array(tour: Sequence[int]) -> np.ndarray:
    """Tour as an integer array; InvalidTour if any node is not a whole number."""
    nodes = np.asarray(tour)
    if nodes.ndim != 1:
        raise InvalidTour("Tour must be a flat sequence of node indices")
    if nodes.dtype.kind in "iu":
        return nodes.astype(int)
    if nodes.dtype.kind != "f" or not np.all(nodes == np.floor(nodes)):
        raise InvalidTour("Tour node indices must be integers")
    return nodes.astype(int)


def as_distance_matrix(matrix) -> np.ndarray:
    """
    Convert a nested sequence or array into a validated float matrix.

    Args:
        matrix: Square matrix of distances, shape (N, N)

    Returns:
        Float64 copy of the matrix

    Raises:
        InvalidGraph: if the matrix is None, empty, or not square
    """
    if matrix is None:
        raise InvalidGraph("Invalid distance matrix, cannot be None")

    if isinstance(matrix, np.ndarray):
        rows = list(matrix) if matrix.ndim >= 1 else []
    else:
        rows = list(matrix)

    if len(rows) == 0:
        raise InvalidGraph("Invalid distance matrix, cannot be empty")

    n = len(rows)
    for row in rows:
        if np.ndim(row) != 1 or len(row) != n:
            raise InvalidGraph("Invalid distance matrix, must be regular square")

    return np.array(rows, dtype=float)


class DistanceGraph:
    """
    Immutable distance graph over N nodes.

    Attributes:
        matrix: Read-only distance matrix, shape (N, N)
            matrix[a, b] = distance travelled from node a to node b
        size: Number of nodes (N)
    """

    def __init__(self, matrix, rng: Optional[random.Random] = None):
        self._matrix = as_distance_matrix(matrix)
        self._matrix.setflags(write=False)
        self._rng = rng if rng is not None else random.Random()

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def size(self) -> int:
        return self._matrix.shape[0]

    def __len__(self) -> int:
        return self.size

    def distance(self, a: int, b: int) -> float:
        """Distance between nodes a and b."""
        n = self.size
        if not (0 <= a < n and 0 <= b < n):
            raise IndexOutOfRange(f"Provided invalid matrix indices ({a}, {b}) for {n} nodes")
        return float(self._matrix[a, b])

    def tour_length(self, tour: Sequence[int]) -> float:
        """
        Total length of the cyclic route through `tour`.

        The last node is connected back to the first to close the cycle.

        Args:
            tour: Ordered node indices

        Returns:
            Total distance traversed

        Raises:
            InvalidTour: if the tour is empty or has non-integer nodes
            IndexOutOfRange: if any node lies outside the matrix
        """
        if tour is None or len(tour) < 1:
            raise InvalidTour("Provided invalid list of nodes describing tour")

        nodes = _node_array(tour)
        if nodes.min() < 0 or nodes.max() >= self.size:
            raise IndexOutOfRange(f"Tour visits a node outside [0, {self.size})")

        # Closing edge last -> first comes from the roll
        return float(self._matrix[nodes, np.roll(nodes, -1)].sum())

    def random_tour(self, rng: Optional[random.Random] = None) -> Tour:
        """
        Uniformly random permutation of all nodes.

        Picks a random remaining node, removes it and appends it to the route
        until no nodes remain, so every permutation is equally likely.

        Args:
            rng: Random source to draw from (default: the graph's own)
        """
        rng = rng if rng is not None else self._rng
        remaining = list(range(self.size))
        route = []
        while remaining:
            idx = rng.randrange(len(remaining))
            route.append(remaining.pop(idx))
        return route

    def validate_tour(self, tour: Sequence[int]) -> None:
        """Raise InvalidTour unless `tour` visits every node exactly once."""
        if tour is None or len(tour) != self.size:
            raise InvalidTour(
                f"Tour must contain {self.size} nodes, got {0 if tour is None else len(tour)}"
            )
        if sorted(_node_array(tour).tolist()) != list(range(self.size)):
            raise InvalidTour("Tour is not a permutation of the graph's nodes")
