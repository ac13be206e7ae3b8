"""Prim's minimum spanning tree, used as a lower bound on tour length."""

from dataclasses import dataclass
from typing import List, Set, Tuple

import numpy as np

from .errors import InvalidGraph
from .graph import as_distance_matrix


@dataclass(frozen=True)
class GraphEdge:
    """Weighted edge between matrix row and column nodes."""
    row: int
    col: int
    weight: float


def _collect_edges(matrix: np.ndarray) -> List[GraphEdge]:
    """All non-zero entries as edges, sorted by weight (stable)."""
    n = matrix.shape[0]
    edges = [
        GraphEdge(row, col, float(matrix[row, col]))
        for row in range(n)
        for col in range(n)
        if matrix[row, col] != 0.0
    ]
    # sorted() is stable, so ties keep their encounter order
    return sorted(edges, key=lambda edge: edge.weight)


def _locate_frontier_edge(vertices: Set[int], edges: List[GraphEdge]) -> GraphEdge:
    """First edge in sorted order with exactly one endpoint in `vertices`."""
    for edge in edges:
        if (edge.row in vertices) != (edge.col in vertices):
            return edge
    raise InvalidGraph(
        f"Graph is disconnected: no edge leaves the {len(vertices)} connected vertices"
    )


def minimum_spanning_tree(distance_matrix) -> np.ndarray:
    """
    Build a minimum spanning tree with Prim's algorithm.

    The tree is grown from the row endpoint of the lightest edge by repeatedly
    taking the lightest edge that crosses the frontier of the connected set.

    Args:
        distance_matrix: Square symmetric matrix of distances, shape (N, N)

    Returns:
        Adjacency matrix of the tree, shape (N, N); each tree edge is stored
        in both [row, col] and [col, row]. All zeros if the matrix has no
        non-zero edges.

    Raises:
        InvalidGraph: if the matrix is None, empty, non-square, or disconnected
    """
    matrix = as_distance_matrix(distance_matrix)
    n = matrix.shape[0]
    tree = np.zeros((n, n), dtype=float)

    edges = _collect_edges(matrix)
    if not edges:
        return tree

    vertices = {edges[0].row}
    while len(vertices) != n:
        edge = _locate_frontier_edge(vertices, edges)
        vertices.add(edge.row)
        vertices.add(edge.col)
        tree[edge.row, edge.col] = edge.weight
        tree[edge.col, edge.row] = edge.weight

    return tree


def mst_cost(tree: np.ndarray) -> float:
    """Total weight of a spanning tree adjacency matrix (each edge counted once)."""
    return float(np.sum(tree)) / 2


def spanning_tree_cost(distance_matrix) -> Tuple[np.ndarray, float]:
    """
    Compute the minimum spanning tree and its cost.

    Returns:
        Tuple of (tree_adjacency_matrix, cost)
    """
    tree = minimum_spanning_tree(distance_matrix)
    return tree, mst_cost(tree)
