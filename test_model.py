"""Tests for the distance graph, spanning tree bound, and tour solution."""

import itertools
import random
from collections import Counter

import numpy as np
import pytest

from tsp_local_search.model import (
    DistanceGraph, TourSolution, InvalidGraph, InvalidTour, IndexOutOfRange,
    generate_euclidean_matrix, load_matrix, load_tour, save_matrix, save_tour,
    minimum_spanning_tree, mst_cost, spanning_tree_cost, solution_quality,
)

MATRIX = [
    [0.0, 4726.0, 1204.0, 6362.0],
    [4726.0, 0.0, 3587.0, 2011.0],
    [1204.0, 3587.0, 0.0, 5162.0],
    [6362.0, 2011.0, 5162.0, 0.0],
]


# --- DistanceGraph -----------------------------------------------------------

@pytest.mark.parametrize("n", [1, 2, 5, 12])
def test_square_matrices_construct(n):
    matrix, _ = generate_euclidean_matrix(n_nodes=n, seed=n)
    graph = DistanceGraph(matrix)
    assert graph.size == n
    assert len(graph) == n


@pytest.mark.parametrize("matrix", [
    None,
    [],
    np.zeros((0, 0)),
    [[0.0, 1.0], [1.0, 0.0], [2.0, 2.0]],
    [[0.0, 1.0], [1.0]],
    np.zeros((2, 3)),
    [1.0, 2.0],
])
def test_invalid_matrices_rejected(matrix):
    with pytest.raises(InvalidGraph):
        DistanceGraph(matrix)


def test_matrix_is_read_only():
    graph = DistanceGraph(MATRIX)
    with pytest.raises(ValueError):
        graph.matrix[0, 1] = 1.0


def test_distance_lookup_and_bounds():
    graph = DistanceGraph(MATRIX)
    assert graph.distance(0, 2) == 1204.0
    assert graph.distance(3, 1) == 2011.0
    with pytest.raises(IndexOutOfRange):
        graph.distance(4, 0)
    with pytest.raises(IndexOutOfRange):
        graph.distance(0, 4)
    # Also catchable as a plain IndexError
    with pytest.raises(IndexError):
        graph.distance(-1, 0)


def test_tour_length_known_values():
    graph = DistanceGraph(MATRIX)
    assert graph.tour_length([0, 1, 2, 3]) == pytest.approx(19837.0, abs=0.1)
    assert graph.tour_length([0, 2, 1, 3]) == pytest.approx(13164.0, abs=0.1)


def test_tour_length_errors():
    graph = DistanceGraph(MATRIX)
    with pytest.raises(InvalidTour):
        graph.tour_length([])
    with pytest.raises(IndexOutOfRange):
        graph.tour_length([0, 1, 5])


def test_non_integer_nodes_rejected():
    graph = DistanceGraph(MATRIX)
    with pytest.raises(InvalidTour):
        graph.tour_length([0, 1.7, 2, 3])
    with pytest.raises(InvalidTour):
        graph.validate_tour([0, 1.7, 2, 3])
    # Whole-number floats (e.g. read from a text file) are still accepted
    assert graph.tour_length([0.0, 1.0, 2.0, 3.0]) == 19837.0


def test_single_node_tour_closes_on_itself():
    graph = DistanceGraph([[0.0]])
    assert graph.tour_length([0]) == 0.0


def test_tour_length_invariant_under_rotation_and_reversal():
    matrix, _ = generate_euclidean_matrix(n_nodes=15, seed=7)
    graph = DistanceGraph(matrix, rng=random.Random(0))
    for _ in range(20):
        tour = graph.random_tour()
        length = graph.tour_length(tour)
        for shift in range(len(tour)):
            rotated = tour[shift:] + tour[:shift]
            assert graph.tour_length(rotated) == pytest.approx(length)
        assert graph.tour_length(tour[::-1]) == pytest.approx(length)


@pytest.mark.parametrize("n", [1, 2, 6, 30])
def test_random_tour_is_permutation(n):
    matrix, _ = generate_euclidean_matrix(n_nodes=n, seed=n)
    graph = DistanceGraph(matrix, rng=random.Random(123))
    for _ in range(200):
        tour = graph.random_tour()
        assert len(tour) == n
        assert sorted(tour) == list(range(n))


def test_random_tour_is_uniform():
    graph = DistanceGraph(np.ones((3, 3)) - np.eye(3), rng=random.Random(2024))
    counts = Counter(tuple(graph.random_tour()) for _ in range(6000))
    assert set(counts) == set(itertools.permutations(range(3)))
    for count in counts.values():
        assert 800 < count < 1200


def test_random_tour_uses_given_source():
    graph = DistanceGraph(MATRIX)
    assert graph.random_tour(random.Random(5)) == graph.random_tour(random.Random(5))


def test_validate_tour():
    graph = DistanceGraph(MATRIX)
    graph.validate_tour([3, 1, 0, 2])
    for bad in ([], [0, 1, 2], [0, 0, 1, 2], [0, 1, 2, 4]):
        with pytest.raises(InvalidTour):
            graph.validate_tour(bad)


# --- Spanning tree -----------------------------------------------------------

def test_mst_known_matrix():
    tree, cost = spanning_tree_cost(MATRIX)
    assert cost == 6802.0
    expected = np.zeros((4, 4))
    for a, b, w in [(0, 2, 1204.0), (1, 2, 3587.0), (1, 3, 2011.0)]:
        expected[a, b] = expected[b, a] = w
    np.testing.assert_array_equal(tree, expected)


def test_mst_is_symmetric_tree():
    matrix, _ = generate_euclidean_matrix(n_nodes=25, seed=3)
    tree = minimum_spanning_tree(matrix)
    np.testing.assert_array_equal(tree, tree.T)
    # A spanning tree on N nodes has N - 1 edges
    assert np.count_nonzero(tree) == 2 * (25 - 1)
    assert mst_cost(tree) == pytest.approx(np.sum(tree) / 2)


def test_mst_ties_are_deterministic():
    matrix = np.ones((5, 5)) - np.eye(5)
    first = minimum_spanning_tree(matrix)
    second = minimum_spanning_tree(matrix)
    np.testing.assert_array_equal(first, second)
    # Stable order grows a star from node 0
    assert list(np.nonzero(first[0])[0]) == [1, 2, 3, 4]


def test_mst_degenerate_graphs_return_zeros():
    np.testing.assert_array_equal(minimum_spanning_tree([[0.0]]), np.zeros((1, 1)))
    np.testing.assert_array_equal(minimum_spanning_tree(np.zeros((3, 3))), np.zeros((3, 3)))


def test_mst_disconnected_graph_rejected():
    matrix = [
        [0.0, 1.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
        [0.0, 0.0, 1.0, 0.0],
    ]
    with pytest.raises(InvalidGraph):
        minimum_spanning_tree(matrix)


@pytest.mark.parametrize("matrix", [None, [], [[0.0, 1.0], [1.0]]])
def test_mst_invalid_input(matrix):
    with pytest.raises(InvalidGraph):
        spanning_tree_cost(matrix)


@pytest.mark.parametrize("seed", range(5))
def test_mst_is_lower_bound(seed):
    matrix, _ = generate_euclidean_matrix(n_nodes=12, seed=seed)
    graph = DistanceGraph(matrix, rng=random.Random(seed))
    _, cost = spanning_tree_cost(matrix)
    for _ in range(50):
        assert cost <= graph.tour_length(graph.random_tour())


# --- TourSolution ------------------------------------------------------------

def test_fitness_agrees_for_current_representation():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 2, 1, 3], graph)
    assert solution.fitness() == solution.fitness(solution.representation) == 13164.0


def test_fitness_follows_representation_assignment():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 1, 2, 3], graph)
    assert solution.fitness() == 19837.0
    solution.representation = [0, 2, 1, 3]
    assert solution.fitness() == 13164.0


def test_fitness_not_stale_after_caller_mutates_representation():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 1, 2, 3], graph)
    assert solution.fitness() == 19837.0
    rep = solution.representation
    rep[1], rep[2] = rep[2], rep[1]
    assert solution.representation == [0, 1, 2, 3]
    assert solution.fitness() == solution.fitness(solution.representation) == 19837.0


def test_invalid_tour_rejected_on_construction():
    graph = DistanceGraph(MATRIX)
    with pytest.raises(InvalidTour):
        TourSolution([0, 0, 1, 2], graph)


def test_propose_change_swaps_two_distinct_positions():
    matrix, _ = generate_euclidean_matrix(n_nodes=8, seed=1)
    graph = DistanceGraph(matrix)
    tour = list(range(8))
    solution = TourSolution(tour, graph, rng=random.Random(9))
    for _ in range(200):
        proposal = solution.propose_change()
        changed = [i for i in range(8) if proposal[i] != tour[i]]
        assert len(changed) == 2
        a, b = changed
        assert proposal[a] == tour[b] and proposal[b] == tour[a]
        assert solution.representation == tour


def test_propose_change_reaches_last_position():
    graph = DistanceGraph(np.ones((3, 3)) - np.eye(3))
    solution = TourSolution([0, 1, 2], graph, rng=random.Random(4))
    moved_last = any(solution.propose_change()[2] != 2 for _ in range(100))
    assert moved_last


def test_propose_change_needs_two_nodes():
    solution = TourSolution([0], DistanceGraph([[0.0]]))
    with pytest.raises(InvalidTour):
        solution.propose_change()


def test_rank_sign_convention():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 2, 1, 3], graph)  # 13164
    assert solution.rank([0, 1, 2, 3]) > 0        # 19837, longer
    assert solution.rank([0, 1, 3, 2]) < 0        # 13103, shorter
    assert solution.rank([2, 1, 3, 0]) == 0       # same cycle rotated


def test_fitness_delta_is_magnitude():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 1, 2, 3], graph)
    assert solution.fitness_delta([0, 1, 2, 3], [0, 2, 1, 3]) == 6673.0
    assert solution.fitness_delta([0, 2, 1, 3], [0, 1, 2, 3]) == 6673.0


def test_copy_is_independent():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 1, 2, 3], graph)
    clone = solution.copy()
    clone.representation = [0, 2, 1, 3]
    assert solution.representation == [0, 1, 2, 3]
    assert solution.fitness() == 19837.0
    assert clone.fitness() == 13164.0


def test_solution_quality():
    graph = DistanceGraph(MATRIX)
    solution = TourSolution([0, 2, 1, 3], graph)
    assert solution.mst_cost() == 6802.0
    expected = (6802.0 / 13164.0) * 100
    assert solution_quality(13164.0, 6802.0) == pytest.approx(expected)
    assert solution.solution_quality() == pytest.approx(expected)
    assert solution.solution_quality(19837.0, 6802.0) == pytest.approx((6802.0 / 19837.0) * 100)


# --- Instance IO -------------------------------------------------------------

def test_matrix_and_tour_files(tmp_path):
    matrix, coords = generate_euclidean_matrix(n_nodes=6, seed=11)
    assert coords.shape == (6, 2)
    np.testing.assert_array_equal(matrix, matrix.T)
    assert np.all(np.diag(matrix) == 0)

    save_matrix(matrix, str(tmp_path / "TSP_6.txt"))
    loaded = load_matrix(str(tmp_path / "TSP_6.txt"))
    np.testing.assert_allclose(loaded, matrix)

    save_tour([3, 1, 0, 2, 5, 4], str(tmp_path / "TSP_6_OPT.txt"))
    assert load_tour(str(tmp_path / "TSP_6_OPT.txt")) == [3, 1, 0, 2, 5, 4]


def test_ragged_matrix_file_rejected_by_graph(tmp_path):
    path = tmp_path / "ragged.txt"
    path.write_text("0 1 2\n1 0\n2 3 0\n")
    matrix = load_matrix(str(path))
    assert matrix.shape == (3, 3)
    assert matrix[1, 2] == 0.0

    path.write_text("0 1\n1 0\n5 5\n")
    with pytest.raises(InvalidGraph):
        DistanceGraph(load_matrix(str(path)))
