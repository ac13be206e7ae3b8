"""Model components: distance graph, spanning tree bound, solutions, and instance IO"""

from .errors import TSPError, InvalidGraph, InvalidTour, IndexOutOfRange
from .graph import DistanceGraph, Tour
from .spanning_tree import GraphEdge, minimum_spanning_tree, mst_cost, spanning_tree_cost
from .solution import Objective, SolutionAdapter, objective_improves, objective_worsens
from .tour import TourSolution, solution_quality
from .instance_generator import (
    generate_euclidean_matrix, load_matrix, load_tour, save_matrix, save_tour, generate_instance_set
)

__all__ = ['TSPError', 'InvalidGraph', 'InvalidTour', 'IndexOutOfRange',
           'DistanceGraph', 'Tour',
           'GraphEdge', 'minimum_spanning_tree', 'mst_cost', 'spanning_tree_cost',
           'Objective', 'SolutionAdapter', 'objective_improves', 'objective_worsens',
           'TourSolution', 'solution_quality',
           'generate_euclidean_matrix', 'load_matrix', 'load_tour', 'save_matrix', 'save_tour',
           'generate_instance_set']
