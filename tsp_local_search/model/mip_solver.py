"""Exact MIP solver for small TSP instances."""

from typing import Tuple, Optional, List
try:
    import pulp
    PULP_AVAILABLE = True
except ImportError:
    PULP_AVAILABLE = False

from .graph import DistanceGraph


def _successor_tour(successor: dict, n: int) -> Optional[List[int]]:
    """Follow successor links from node 0; None if they do not form one cycle."""
    tour = [0]
    node = successor.get(0)
    while node is not None and node != 0 and len(tour) <= n:
        tour.append(node)
        node = successor.get(node)
    if len(tour) != n or node != 0:
        return None
    return tour


def solve_exact(distance_matrix, time_limit: Optional[float] = 60.0) -> Tuple[Optional[float], Optional[List[int]]]:
    """
    Solve a TSP instance to optimality using the MTZ formulation.

    Intended for small benchmark instances (a few dozen nodes at most) where a
    known-optimal tour is useful for judging the heuristics.

    Args:
        distance_matrix: Square distance matrix, shape (N, N)
        time_limit: Time limit in seconds (default: 60 seconds)

    Returns:
        Tuple of (optimal_length, optimal_tour), tour starting at node 0
        Returns (None, None) if solver unavailable, time limit exceeded, or solver failed
    """
    if not PULP_AVAILABLE:
        print("Warning: PuLP not available. Install with: pip install pulp")
        return None, None

    if time_limit is None:
        time_limit = 60.0

    graph = DistanceGraph(distance_matrix)
    D = graph.matrix
    N = graph.size

    if N <= 2:
        tour = list(range(N))
        return graph.tour_length(tour), tour

    prob = pulp.LpProblem("SymmetricTSP", pulp.LpMinimize)

    # x[i, j] = 1 if the tour travels directly from i to j
    x = {}
    for i in range(N):
        for j in range(N):
            if i != j:
                x[i, j] = pulp.LpVariable(f"x_{i}_{j}", cat='Binary')

    # MTZ ordering variables (node 0 is the depot)
    order = {}
    for i in range(1, N):
        order[i] = pulp.LpVariable(f"order_{i}", lowBound=1, upBound=N - 1, cat='Continuous')

    prob += pulp.lpSum([D[i, j] * x[i, j] for (i, j) in x])

    # Leave and enter every node exactly once
    for i in range(N):
        prob += pulp.lpSum([x[i, j] for j in range(N) if j != i]) == 1
        prob += pulp.lpSum([x[j, i] for j in range(N) if j != i]) == 1

    # Subtour elimination
    for i in range(1, N):
        for j in range(1, N):
            if i != j:
                prob += order[i] - order[j] + (N - 1) * x[i, j] <= N - 2

    prob.solve(pulp.PULP_CBC_CMD(timeLimit=time_limit, msg=0))

    if prob.status == pulp.LpStatusNotSolved:
        print(f"Warning: MIP solver did not solve within time limit ({time_limit}s) "
              f"for instance (N={N})")
        return None, None
    elif prob.status != pulp.LpStatusOptimal:
        print(f"Warning: MIP solver status: {pulp.LpStatus[prob.status]} "
              f"for instance (N={N})")
        return None, None

    successor = {}
    for (i, j), var in x.items():
        val = pulp.value(var)
        if val is None:
            print(f"Warning: MIP variable x[{i},{j}] is None")
            return None, None
        if val > 0.5:
            successor[i] = j

    tour = _successor_tour(successor, N)
    if tour is None:
        print("Warning: MIP solution does not form a single tour")
        return None, None

    # Report the length of the extracted tour rather than the LP objective
    return graph.tour_length(tour), tour
