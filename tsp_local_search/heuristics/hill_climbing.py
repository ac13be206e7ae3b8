"""Random mutation hill climbing (first-improvement)."""

from ..model.solution import objective_improves
from .base import LocalSearch, S


class RandomMutatingHillClimber(LocalSearch[S]):
    """
    Propose one neighbour per iteration and keep it only if it is strictly
    better under the objective. Never accepts a worse or equal solution, so
    the fitness trace is monotone.
    """

    name = 'RMHC'

    def _perform_iteration(self, current: S) -> S:
        candidate = current.propose_change()
        if objective_improves(self.objective, current.rank(candidate)):
            current.representation = candidate
        return current
