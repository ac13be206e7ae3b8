"""Instance generator and text-file IO for distance matrices and tours."""

import random
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from .graph import Tour


def generate_euclidean_matrix(
    n_nodes: int = 20,
    seed: int = 42,
    coordinate_range: Tuple[float, float] = (0.0, 1000.0),
    round_distances: bool = True,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a symmetric distance matrix from random points in the plane.

    Args:
        n_nodes: Number of nodes (N)
        seed: Random seed for reproducibility
        coordinate_range: Range for both x and y coordinates
        round_distances: Round distances to the nearest integer (as in the
            TSPLIB-style benchmark files)

    Returns:
        Tuple of (distance_matrix, coordinates)
        distance_matrix shape (N, N), coordinates shape (N, 2)
    """
    random.seed(seed)
    np.random.seed(seed)

    coordinates = np.random.uniform(coordinate_range[0], coordinate_range[1], size=(n_nodes, 2))

    # Pairwise Euclidean distances via broadcasting
    diff = coordinates[:, None, :] - coordinates[None, :, :]
    matrix = np.sqrt(np.sum(diff ** 2, axis=-1))
    if round_distances:
        matrix = np.round(matrix)

    # Enforce exact symmetry and a zero diagonal
    matrix = (matrix + matrix.T) / 2
    np.fill_diagonal(matrix, 0.0)

    return matrix, coordinates


def load_matrix(filepath: str, sep: Optional[str] = None) -> np.ndarray:
    """
    Load a distance matrix from a delimited text file, one row per line.

    Short rows are padded with zeros up to the widest row, so a ragged file
    still loads (DistanceGraph rejects it later if it is not square).

    Args:
        filepath: Path to matrix file
        sep: Column separator (default: any whitespace)

    Returns:
        Matrix as float array
    """
    rows: List[List[float]] = []
    with open(filepath, 'r') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            columns = [c for c in line.split(sep) if c.strip()]
            rows.append([float(c) for c in columns])

    n_cols = max((len(r) for r in rows), default=0)
    matrix = np.zeros((len(rows), n_cols), dtype=float)
    for i, row in enumerate(rows):
        matrix[i, :len(row)] = row
    return matrix


def load_tour(filepath: str) -> Tour:
    """
    Load a tour (e.g. a known-optimal ordering) from a text file.

    Every number in the file is read in order, regardless of line layout.
    """
    tour: Tour = []
    with open(filepath, 'r') as f:
        for token in f.read().split():
            tour.append(int(float(token)))
    return tour


def save_matrix(matrix: np.ndarray, filepath: str, sep: str = ' ') -> None:
    """Save a distance matrix as delimited text, one row per line."""
    Path(filepath).parent.mkdir(exist_ok=True, parents=True)
    np.savetxt(filepath, np.asarray(matrix, dtype=float), delimiter=sep, fmt='%.4f')


def save_tour(tour: Tour, filepath: str) -> None:
    """Save a tour with one node index per line."""
    Path(filepath).parent.mkdir(exist_ok=True, parents=True)
    with open(filepath, 'w') as f:
        f.write('\n'.join(str(int(node)) for node in tour))
        f.write('\n')


def generate_instance_set(
    output_dir: str = 'instances',
    sizes: Tuple[int, ...] = (10, 20, 48),
    n_per_size: int = 2,
    solve_small: bool = True,
    exact_max_nodes: int = 12,
) -> None:
    """
    Generate a set of Euclidean instances and save them as TSP_<n>_<k>.txt.

    For instances with at most `exact_max_nodes` nodes, the exact solver is
    run and its tour saved as TSP_<n>_<k>_OPT.txt.

    Args:
        output_dir: Directory to save instances
        sizes: Node counts to generate
        n_per_size: Number of instances per node count
        solve_small: Save exact tours for small instances
        exact_max_nodes: Largest instance handed to the exact solver
    """
    from .mip_solver import solve_exact

    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True, parents=True)

    for n in sizes:
        print(f"Generating {n_per_size} instances with {n} nodes...")
        for k in range(n_per_size):
            matrix, _ = generate_euclidean_matrix(n_nodes=n, seed=100 * n + k)
            filepath = output_path / f'TSP_{n}_{k:02d}.txt'
            save_matrix(matrix, str(filepath))
            print(f"  Saved {filepath}")

            if solve_small and n <= exact_max_nodes:
                length, tour = solve_exact(matrix)
                if tour is not None:
                    opt_path = output_path / f'TSP_{n}_{k:02d}_OPT.txt'
                    save_tour(tour, str(opt_path))
                    print(f"  Saved {opt_path} (length {length:.1f})")

    print(f"\nGenerated {len(sizes) * n_per_size} instances in {output_dir}/")
