"""Validation errors raised by the graph and tour models."""


class TSPError(ValueError):
    """Base class for invalid TSP inputs."""


class InvalidGraph(TSPError):
    """Distance matrix is missing, empty, or not square."""


class InvalidTour(TSPError):
    """Tour is empty or is not a permutation of the graph's nodes."""


class IndexOutOfRange(TSPError, IndexError):
    """Node index lies outside the distance matrix."""
