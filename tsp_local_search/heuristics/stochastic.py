"""Stochastic hill climbing with logistic acceptance of worse neighbours."""

from ..model.solution import Objective, objective_worsens
from .acceptance import accept, logistic_acceptance
from .base import LocalSearch, S


def oriented_delta(solution, candidate, objective: Objective) -> float:
    """
    Fitness difference between candidate and current, ordered by objective.

    Minimisation measures delta(candidate, current); maximisation measures
    delta(current, candidate). The adapter returns a magnitude either way.
    """
    if objective is Objective.MINIMISE:
        return solution.fitness_delta(candidate, solution.representation)
    return solution.fitness_delta(solution.representation, candidate)


def derive_convergence_parameter(mst_cost: float, constant: float = 0.0055) -> float:
    """Scale the convergence parameter to the instance via its MST cost."""
    return mst_cost * constant


class StochasticHillClimbing(LocalSearch[S]):
    """
    Accept equal-or-better neighbours; accept a worse neighbour with
    probability 1 / (1 + exp(delta / convergence_parameter)).

    Args:
        iterations: Iteration budget
        initial_solution: Starting solution
        objective: Whether fitness is minimised or maximised
        convergence_parameter: Positive constant scaling the acceptance curve

    Raises:
        ValueError: if convergence_parameter is not positive
    """

    name = 'SHC'

    def __init__(
        self,
        iterations: int,
        initial_solution: S,
        objective: Objective = Objective.MINIMISE,
        convergence_parameter: float = 1.0,
        **kwargs,
    ):
        if not convergence_parameter > 0:
            raise ValueError(f"convergence_parameter must be positive, got {convergence_parameter}")
        super().__init__(iterations, initial_solution, objective, **kwargs)
        self.convergence_parameter = float(convergence_parameter)

    def _perform_iteration(self, current: S) -> S:
        candidate = current.propose_change()
        rank = current.rank(candidate)
        delta = oriented_delta(current, candidate, self.objective)

        if objective_worsens(self.objective, rank):
            if accept(logistic_acceptance(delta, self.convergence_parameter), self.rng):
                current.representation = candidate
        else:
            current.representation = candidate
        return current
