"""Random restart hill climbing built from repeated bounded RMHC runs."""

import random
from typing import Callable, Optional

from ..model.solution import Objective, objective_improves
from .base import LocalSearch, S
from .hill_climbing import RandomMutatingHillClimber

# (iterations, starting solution, objective, rng) -> inner search
InnerSearchFactory = Callable[[int, S, Objective, random.Random], LocalSearch]


def default_inner_search(iterations: int, solution: S, objective: Objective, rng: random.Random) -> LocalSearch:
    return RandomMutatingHillClimber(iterations, solution, objective, rng=rng)


class RandomRestartHillClimbing(LocalSearch[S]):
    """
    Each outer iteration runs a fresh RMHC of `inner_iterations` steps from a
    copy of the current solution and adopts its result only if it is strictly
    better. Total work is about `iterations * inner_iterations` proposals.

    Args:
        iterations: Number of outer iterations (inner searches)
        initial_solution: Starting solution
        objective: Whether fitness is minimised or maximised
        inner_iterations: Budget of each inner RMHC
        inner_factory: Builds the inner search; defaults to RandomMutatingHillClimber
    """

    name = 'RRHC'

    def __init__(
        self,
        iterations: int,
        initial_solution: S,
        objective: Objective = Objective.MINIMISE,
        inner_iterations: int = 100,
        inner_factory: Optional[InnerSearchFactory] = None,
        **kwargs,
    ):
        super().__init__(iterations, initial_solution, objective, **kwargs)
        self.inner_iterations = inner_iterations
        self.inner_factory = inner_factory if inner_factory is not None else default_inner_search

    def _perform_iteration(self, current: S) -> S:
        inner = self.inner_factory(self.inner_iterations, current.copy(), self.objective, self.rng)
        proposed = inner.run_algorithm()

        candidate = proposed.representation
        if objective_improves(self.objective, current.rank(candidate)):
            current.representation = candidate
        return current

    def _progress_suffix(self) -> str:
        return f", inner_iterations={self.inner_iterations}"
