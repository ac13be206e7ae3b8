"""Heuristic algorithms: RMHC, RRHC, SHC, SA, and acceptance functions"""

from .base import LocalSearch
from .hill_climbing import RandomMutatingHillClimber
from .restart import RandomRestartHillClimbing
from .stochastic import StochasticHillClimbing, derive_convergence_parameter
from .annealing import SimulatedAnnealing, derive_annealing_schedule
from .acceptance import logistic_acceptance, boltzmann_acceptance

__all__ = [
    'LocalSearch',
    'RandomMutatingHillClimber', 'RandomRestartHillClimbing',
    'StochasticHillClimbing', 'SimulatedAnnealing',
    'derive_convergence_parameter', 'derive_annealing_schedule',
    'logistic_acceptance', 'boltzmann_acceptance'
]
