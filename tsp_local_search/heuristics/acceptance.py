"""Acceptance probabilities for worse candidate solutions."""

import math


def logistic_acceptance(delta: float, convergence_parameter: float) -> float:
    """
    Stochastic hill climbing acceptance: 1 / (1 + exp(delta / c)).

    Evaluated without overflowing for large delta / c.

    Args:
        delta: Non-negative fitness difference (how much worse the candidate is)
        convergence_parameter: Positive constant c; smaller values make the
            search greedier
    """
    x = delta / convergence_parameter
    if x >= 0:
        z = math.exp(-x)
        return z / (1.0 + z)
    return 1.0 / (1.0 + math.exp(x))


def boltzmann_acceptance(delta: float, temperature: float) -> float:
    """
    Simulated annealing acceptance: exp(-delta / T).

    Returns 1 for delta <= 0 and 0 once the temperature has reached zero.
    """
    if delta <= 0:
        return 1.0
    if temperature <= 0:
        return 0.0
    return math.exp(-delta / temperature)


def accept(probability: float, rng) -> bool:
    """Accept with the given probability against one uniform [0, 1) draw."""
    return probability > rng.random()
