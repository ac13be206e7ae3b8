"""Simulated annealing with a geometric cooling schedule."""

from typing import Tuple

from ..model.solution import Objective, objective_worsens
from .acceptance import accept, boltzmann_acceptance
from .base import LocalSearch, S
from .stochastic import oriented_delta


def derive_annealing_schedule(
    mst_cost: float,
    iterations: int,
    start_factor: float = 0.95,
    end_factor: float = 0.0000018,
) -> Tuple[float, float]:
    """
    Starting temperature and cooling rate scaled to the instance.

    The temperature starts at `start_factor * mst_cost` and decays
    geometrically to `end_factor * mst_cost` after `iterations` steps.

    Returns:
        Tuple of (start_temperature, cooling_rate)
    """
    start_temperature = mst_cost * start_factor
    end_temperature = mst_cost * end_factor
    cooling_rate = (end_temperature / start_temperature) ** (1.0 / max(1, iterations))
    return start_temperature, cooling_rate


class SimulatedAnnealing(LocalSearch[S]):
    """
    Accept equal-or-better neighbours; accept a worse neighbour with
    probability exp(-delta / T). After every iteration, accepted or not,
    T is multiplied by the cooling rate.

    Args:
        iterations: Iteration budget
        initial_solution: Starting solution
        objective: Whether fitness is minimised or maximised
        temperature: Starting temperature (positive)
        cooling_rate: Multiplicative decay per iteration, in (0, 1]

    Raises:
        ValueError: if temperature or cooling_rate is out of range
    """

    name = 'SA'

    def __init__(
        self,
        iterations: int,
        initial_solution: S,
        objective: Objective = Objective.MINIMISE,
        temperature: float = 100.0,
        cooling_rate: float = 0.99,
        **kwargs,
    ):
        if not temperature > 0:
            raise ValueError(f"temperature must be positive, got {temperature}")
        if not 0 < cooling_rate <= 1:
            raise ValueError(f"cooling_rate must be in (0, 1], got {cooling_rate}")
        super().__init__(iterations, initial_solution, objective, **kwargs)
        self.start_temperature = float(temperature)
        self.temperature = float(temperature)
        self.cooling_rate = float(cooling_rate)

    def _perform_iteration(self, current: S) -> S:
        candidate = current.propose_change()
        rank = current.rank(candidate)
        delta = oriented_delta(current, candidate, self.objective)

        if objective_worsens(self.objective, rank):
            if accept(boltzmann_acceptance(delta, self.temperature), self.rng):
                current.representation = candidate
        else:
            current.representation = candidate

        self.temperature *= self.cooling_rate
        return current

    def _progress_suffix(self) -> str:
        return f", T={self.temperature:.4g}"
