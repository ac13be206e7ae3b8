"""Permutation-based TSP solution with swap mutation."""

import random
from typing import Optional, Sequence

from .errors import InvalidTour
from .graph import DistanceGraph, Tour
from .solution import SolutionAdapter
from .spanning_tree import spanning_tree_cost


def solution_quality(fitness: float, mst_cost: float) -> float:
    """
    Tour quality as a percentage of the MST lower bound.

    100% would mean the tour is as short as the minimum spanning tree, which
    a Hamiltonian cycle never actually reaches.
    """
    return (mst_cost / fitness) * 100


def _compare(a: float, b: float) -> int:
    return (a > b) - (a < b)


class TourSolution(SolutionAdapter[Tour]):
    """
    TSP solution holding one tour over a shared DistanceGraph.

    Args:
        tour: Visiting order, a permutation of 0..N-1
        graph: Distance graph shared (read-only) between solutions
        rng: Random source for proposals (defaults to a fresh random.Random)
        validate: Check that `tour` is a permutation of the graph's nodes
    """

    def __init__(
        self,
        tour: Sequence[int],
        graph: DistanceGraph,
        rng: Optional[random.Random] = None,
        validate: bool = True,
    ):
        if validate:
            graph.validate_tour(tour)
        self._graph = graph
        self._rng = rng if rng is not None else random.Random()
        self._tour = [int(node) for node in tour]
        self._fitness: Optional[float] = None

    @property
    def graph(self) -> DistanceGraph:
        return self._graph

    @property
    def representation(self) -> Tour:
        # Copy so callers cannot mutate the tour behind the cached fitness
        return list(self._tour)

    @representation.setter
    def representation(self, representation: Sequence[int]) -> None:
        self._tour = list(representation)
        self._fitness = None

    def fitness(self, representation: Optional[Sequence[int]] = None) -> float:
        if representation is not None:
            return self._graph.tour_length(representation)
        if self._fitness is None:
            self._fitness = self._graph.tour_length(self._tour)
        return self._fitness

    def fitness_delta(self, representation_a: Sequence[int], representation_b: Sequence[int]) -> float:
        return abs(self._graph.tour_length(representation_a) - self._graph.tour_length(representation_b))

    def propose_change(self) -> Tour:
        """
        Swap two distinct, uniformly chosen positions of a copy of the tour.

        Raises:
            InvalidTour: if the tour has fewer than two nodes
        """
        n = len(self._tour)
        if n < 2:
            raise InvalidTour("Swap proposal needs at least two nodes in the tour")

        first = second = 0
        while first == second:
            first = self._rng.randrange(n)
            second = self._rng.randrange(n)

        proposal = list(self._tour)
        proposal[first], proposal[second] = proposal[second], proposal[first]
        return proposal

    def rank(self, candidate: Sequence[int]) -> int:
        return _compare(self._graph.tour_length(candidate), self.fitness())

    def copy(self) -> 'TourSolution':
        clone = TourSolution(self._tour, self._graph, rng=self._rng, validate=False)
        clone._fitness = self._fitness
        return clone

    def mst_cost(self) -> float:
        """Cost of the minimum spanning tree of this solution's graph."""
        _, cost = spanning_tree_cost(self._graph.matrix)
        return cost

    def solution_quality(self, fitness: Optional[float] = None, mst_cost: Optional[float] = None) -> float:
        """
        MST-relative quality of this tour (or of a given fitness).

        Args:
            fitness: Fitness to score (default: current fitness)
            mst_cost: Precomputed MST cost (default: computed from the graph)
        """
        if fitness is None:
            fitness = self.fitness()
        if mst_cost is None:
            mst_cost = self.mst_cost()
        return solution_quality(fitness, mst_cost)

    def __repr__(self) -> str:
        return f"TourSolution(fitness={self.fitness():.2f}, nodes={len(self._tour)})"
