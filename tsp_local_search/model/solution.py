"""Solution abstraction shared by all local-search heuristics."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, Optional, TypeVar

R = TypeVar('R')


class Objective(Enum):
    """Optimisation direction of a solution's fitness."""
    MINIMISE = 'minimise'
    MAXIMISE = 'maximise'


def objective_improves(objective: Objective, rank: int) -> bool:
    """True if a candidate with the given `rank` is strictly better than current."""
    if objective is Objective.MINIMISE:
        return rank < 0
    return rank > 0


def objective_worsens(objective: Objective, rank: int) -> bool:
    """True if a candidate with the given `rank` is strictly worse than current."""
    if objective is Objective.MINIMISE:
        return rank > 0
    return rank < 0


class SolutionAdapter(ABC, Generic[R]):
    """
    Problem-independent view of a candidate solution.

    Heuristics only see the representation as an opaque value of type R and
    interact with it through fitness evaluation, neighbour proposal and
    ranking.
    """

    @property
    @abstractmethod
    def representation(self) -> R:
        ...

    @representation.setter
    @abstractmethod
    def representation(self, representation: R) -> None:
        ...

    @abstractmethod
    def fitness(self, representation: Optional[R] = None) -> float:
        """Fitness of `representation`, or of the current one if omitted."""

    @abstractmethod
    def fitness_delta(self, representation_a: R, representation_b: R) -> float:
        """Non-negative magnitude of the fitness difference between a and b."""

    @abstractmethod
    def propose_change(self) -> R:
        """Neighbouring representation; the receiver is left untouched."""

    @abstractmethod
    def rank(self, candidate: R) -> int:
        """
        Compare `candidate` against the current representation.

        Returns:
            Positive if the candidate's fitness is higher, zero if equal,
            negative if lower.
        """

    @abstractmethod
    def copy(self) -> 'SolutionAdapter[R]':
        """Independent solution over the same problem and representation."""
