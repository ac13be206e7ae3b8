"""Shared iteration loop for the local-search heuristics."""

import random
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from ..model.solution import Objective, SolutionAdapter

S = TypeVar('S', bound=SolutionAdapter)


class LocalSearch(ABC, Generic[S]):
    """
    Fixed-budget local search over a SolutionAdapter.

    Runs exactly `iterations` iterations (none if the budget is not
    positive); there is no early stopping. The search owns the solution it is
    given and updates it as proposals are accepted.

    Args:
        iterations: Iteration budget
        initial_solution: Starting solution
        objective: Whether fitness is minimised or maximised
        rng: Random source with a `random()` method (default: random.Random(seed))
        seed: Seed for the default random source
        verbose: Print progress every `log_every` iterations
        log_every: Progress interval for verbose output

    Attributes:
        current: Solution the search is currently improving
        iterations_performed: Iterations completed so far
        fitness_log: Initial fitness followed by the current fitness after
            every iteration
    """

    name = 'local_search'

    def __init__(
        self,
        iterations: int,
        initial_solution: S,
        objective: Objective = Objective.MINIMISE,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
        log_every: int = 1000,
    ):
        self.iterations = iterations
        self.iterations_performed = 0
        self.current = initial_solution
        self.objective = objective
        self.rng = rng if rng is not None else random.Random(seed)
        self.verbose = verbose
        self.log_every = max(1, log_every)
        self.fitness_log: List[float] = []

    @property
    def done(self) -> bool:
        return self.iterations_performed >= self.iterations

    def run_algorithm(self) -> S:
        """Run the remaining iterations and return the final solution."""
        if not self.fitness_log:
            self.fitness_log.append(self.current.fitness())

        while self.iterations_performed < self.iterations:
            self.current = self._perform_iteration(self.current)
            self.iterations_performed += 1
            self.fitness_log.append(self.current.fitness())

            if self.verbose and self.iterations_performed % self.log_every == 0:
                print(
                    f"[{self.name}] Iteration {self.iterations_performed}/{self.iterations}: "
                    f"current_fitness={self.current.fitness():.2f}{self._progress_suffix()}"
                )

        return self.current

    def _progress_suffix(self) -> str:
        return ''

    @abstractmethod
    def _perform_iteration(self, current: S) -> S:
        """Advance the search by one iteration and return the current solution."""
