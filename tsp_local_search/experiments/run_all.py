"""Experimental harness for running all heuristics on benchmark matrices."""

import random
import time
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Dict, Any, Callable, List, Optional, Sequence

import numpy as np

from ..model.graph import DistanceGraph
from ..model.solution import Objective
from ..model.spanning_tree import spanning_tree_cost
from ..model.tour import TourSolution, solution_quality
from ..heuristics.annealing import SimulatedAnnealing, derive_annealing_schedule
from ..heuristics.base import LocalSearch
from ..heuristics.hill_climbing import RandomMutatingHillClimber
from ..heuristics.restart import RandomRestartHillClimbing
from ..heuristics.stochastic import StochasticHillClimbing, derive_convergence_parameter

ALGORITHMS = ('RMHC', 'RRHC', 'SHC', 'SA')

DEFAULT_PARAMS: Dict[str, Any] = {
    'resamples': 25,
    'iterations': 20000,
    'inner_iterations': 500,   # RRHC runs iterations // inner_iterations restarts
    'shc_constant': 0.0055,    # convergence parameter = MST cost * constant
    'sa_start_factor': 0.95,   # start temperature = MST cost * factor
    'sa_end_factor': 0.0000018,
    'objective': 'minimise',
}


def merge_params(params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Overlay caller parameters on DEFAULT_PARAMS, rejecting unknown keys."""
    merged = dict(DEFAULT_PARAMS)
    if params:
        unknown = set(params) - set(DEFAULT_PARAMS)
        if unknown:
            raise ValueError(f"Unknown parameters: {sorted(unknown)}")
        merged.update(params)
    return merged


def build_search(
    algorithm: str,
    solution: TourSolution,
    params: Dict[str, Any],
    mst_cost: float,
    rng: random.Random,
) -> LocalSearch:
    """
    Construct one of the four heuristics with instance-scaled parameters.

    Args:
        algorithm: One of 'RMHC', 'RRHC', 'SHC', 'SA'
        solution: Starting solution (owned by the returned search)
        params: Merged parameters (see DEFAULT_PARAMS)
        mst_cost: MST cost of the instance, used to scale SHC/SA parameters
        rng: Random source for acceptance draws

    Returns:
        Unstarted search
    """
    objective = Objective(params['objective'])
    iterations = int(params['iterations'])

    if algorithm == 'RMHC':
        return RandomMutatingHillClimber(iterations, solution, objective, rng=rng)
    if algorithm == 'RRHC':
        inner = max(1, int(params['inner_iterations']))
        return RandomRestartHillClimbing(
            iterations // inner, solution, objective, inner_iterations=inner, rng=rng
        )
    if algorithm == 'SHC':
        return StochasticHillClimbing(
            iterations, solution, objective,
            convergence_parameter=derive_convergence_parameter(mst_cost, params['shc_constant']),
            rng=rng,
        )
    if algorithm == 'SA':
        temperature, cooling_rate = derive_annealing_schedule(
            mst_cost, iterations, params['sa_start_factor'], params['sa_end_factor']
        )
        return SimulatedAnnealing(
            iterations, solution, objective,
            temperature=temperature, cooling_rate=cooling_rate, rng=rng,
        )
    raise ValueError(f"Unknown algorithm: {algorithm}")


def search_parameters(search: LocalSearch) -> Dict[str, Any]:
    """Strategy-specific parameters worth reporting alongside results."""
    if isinstance(search, StochasticHillClimbing):
        return {'convergence_parameter': search.convergence_parameter}
    if isinstance(search, SimulatedAnnealing):
        return {'start_temperature': search.start_temperature, 'cooling_rate': search.cooling_rate}
    if isinstance(search, RandomRestartHillClimbing):
        return {'inner_iterations': search.inner_iterations, 'restarts': search.iterations}
    return {}


def run_strategy(
    algorithm: str,
    graph: DistanceGraph,
    params: Dict[str, Any],
    mst_cost: float,
    seed: int,
    initial_tour: Optional[Sequence[int]] = None,
    keep_trace: bool = False,
) -> Dict[str, Any]:
    """
    Run one resample of one heuristic.

    Args:
        algorithm: Heuristic name
        graph: Distance graph of the instance
        params: Merged parameters
        mst_cost: MST cost of the instance
        seed: Seed for this resample's random source
        initial_tour: Starting tour (default: uniformly random tour)
        keep_trace: Include the fitness trace in the result

    Returns:
        Dictionary with fitness, quality, runtime, tour and parameters
    """
    rng = random.Random(seed)
    if initial_tour is None:
        start = graph.random_tour(rng)
    else:
        start = list(initial_tour)

    solution = TourSolution(start, graph, rng=rng)
    initial_fitness = solution.fitness()

    begin = time.perf_counter()
    search = build_search(algorithm, solution, params, mst_cost, rng)
    final = search.run_algorithm()
    runtime = time.perf_counter() - begin

    fitness = final.fitness()
    return {
        'algorithm': algorithm,
        'seed': seed,
        'initial_fitness': initial_fitness,
        'fitness': fitness,
        'quality': solution_quality(fitness, mst_cost),
        'runtime': runtime,
        'iterations': search.iterations_performed,
        'tour': list(final.representation),
        'parameters': search_parameters(search),
        'fitness_log': list(search.fitness_log) if keep_trace else None,
    }


def run_resamples(
    algorithm: str,
    matrix: np.ndarray,
    params: Optional[Dict[str, Any]] = None,
    seed: int = 42,
    initial_tour: Optional[Sequence[int]] = None,
) -> List[Dict[str, Any]]:
    """
    Run `params['resamples']` independent resamples of one heuristic.

    The fitness trace is kept for the first resample only.
    """
    params = merge_params(params)
    graph = DistanceGraph(matrix)
    _, mst_cost = spanning_tree_cost(graph.matrix)

    runs = []
    for i in range(int(params['resamples'])):
        runs.append(run_strategy(
            algorithm, graph, params, mst_cost,
            seed=seed + i,
            initial_tour=initial_tour,
            keep_trace=(i == 0),
        ))
    return runs


def _algorithm_seed(seed: int, position: int) -> int:
    return seed + 100003 * position


def run_all_strategies_on_matrix(
    matrix: np.ndarray,
    params: Optional[Dict[str, Any]] = None,
    algorithms: Sequence[str] = ALGORITHMS,
    seed: int = 42,
    workers: int = 4,
    initial_tour: Optional[Sequence[int]] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Run every heuristic on one matrix, one worker process per heuristic.

    Args:
        matrix: Distance matrix of the instance
        params: Parameter overrides
        algorithms: Heuristics to run
        seed: Base random seed
        workers: Worker processes (<= 1 runs sequentially in this process)
        initial_tour: Optional starting tour shared by every resample

    Returns:
        Dictionary mapping algorithm name to {'runs': [...]} or {'error': str}
    """
    params = merge_params(params)
    results: Dict[str, Dict[str, Any]] = {}

    def collect(alg_name: str, fetch: Callable[[], List[Dict[str, Any]]]) -> None:
        try:
            results[alg_name] = {'runs': fetch()}
        except Exception as e:
            print(f"Error running {alg_name}: {e}")
            results[alg_name] = {'error': str(e), 'runs': []}

    if workers <= 1:
        for i, alg_name in enumerate(algorithms):
            collect(alg_name, lambda a=alg_name, s=_algorithm_seed(seed, i): run_resamples(
                a, matrix, params, s, initial_tour
            ))
        return results

    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = {
            alg_name: executor.submit(
                run_resamples, alg_name, np.asarray(matrix), params,
                _algorithm_seed(seed, i), initial_tour,
            )
            for i, alg_name in enumerate(algorithms)
        }
        for alg_name, future in futures.items():
            collect(alg_name, future.result)

    return results


def evaluate_optimal_tour(matrix: np.ndarray, tour: Sequence[int]) -> Dict[str, float]:
    """Fitness, quality and MST cost of a known-optimal tour."""
    graph = DistanceGraph(matrix)
    solution = TourSolution(tour, graph)
    _, mst_cost = spanning_tree_cost(graph.matrix)
    fitness = solution.fitness()
    return {
        'fitness': fitness,
        'quality': solution.solution_quality(fitness, mst_cost),
        'mst': mst_cost,
    }


def find_benchmarks(instances_dir: str) -> List[Dict[str, Optional[Path]]]:
    """
    Matrix files in a directory, paired with their optional optimal tours.

    A matrix ``<name>.txt`` is paired with ``<name>_OPT.txt`` if present.
    """
    instances_path = Path(instances_dir)
    benchmarks = []
    for matrix_file in sorted(instances_path.glob('*.txt')):
        if matrix_file.stem.endswith('_OPT'):
            continue
        opt_file = matrix_file.with_name(f"{matrix_file.stem}_OPT.txt")
        benchmarks.append({
            'name': matrix_file.stem,
            'matrix': matrix_file,
            'optimal': opt_file if opt_file.exists() else None,
        })
    return benchmarks


def run_all_experiments(
    instances_dir: str,
    output_dir: str,
    params: Optional[Dict[str, Any]] = None,
    algorithms: Sequence[str] = ALGORITHMS,
    seed: int = 42,
    workers: int = 4,
    seed_with_optimal: bool = False,
    make_plots: bool = True,
) -> None:
    """
    Run all heuristics on all benchmark matrices and save results.

    Writes, into `output_dir`:
        <ALG>_SUMMARY.csv  one summary row per benchmark
        SUMMARIES.csv      optimal tour fitness/quality/MST per benchmark
        all_results.csv    one row per resample
        errors.csv         benchmarks that could not be loaded (only if any)
        plots (unless make_plots is False)

    Args:
        instances_dir: Directory containing TSP_*.txt matrices
        output_dir: Directory to save results
        params: Parameter overrides (see DEFAULT_PARAMS)
        algorithms: Heuristics to run
        seed: Base random seed
        workers: Worker processes per benchmark
        seed_with_optimal: Start every resample from the optimal tour when
            one is available (otherwise resamples start from random tours)
        make_plots: Create plots at the end
    """
    import pandas as pd
    from ..model.instance_generator import load_matrix, load_tour
    from .plots import create_all_plots, plot_fitness_traces
    from .report import append_summary, summarise_runs, append_optimal_summary

    params = merge_params(params)
    benchmarks = find_benchmarks(instances_dir)

    if not benchmarks:
        print(f"No matrix files found in {instances_dir}")
        return

    output_path = Path(output_dir)
    output_path.mkdir(exist_ok=True, parents=True)

    print(f"Running experiments on {len(benchmarks)} benchmarks...")
    all_rows = []
    skipped = []

    for k, bench in enumerate(benchmarks):
        print(f"\nProcessing {bench['name']} [{k + 1}/{len(benchmarks)}]...")
        try:
            matrix = load_matrix(str(bench['matrix']))
            optimal_tour = load_tour(str(bench['optimal'])) if bench['optimal'] is not None else None
            _, mst = spanning_tree_cost(matrix)
            optimal = evaluate_optimal_tour(matrix, optimal_tour) if optimal_tour is not None else None
        except Exception as e:
            print(f"Skipping {bench['name']}: {e}")
            skipped.append({'instance': bench['name'], 'error': str(e)})
            continue

        results = run_all_strategies_on_matrix(
            matrix,
            params,
            algorithms=algorithms,
            seed=seed,
            workers=workers,
            initial_tour=optimal_tour if seed_with_optimal else None,
        )

        traces = {}
        for alg_name, alg_results in results.items():
            runs = alg_results['runs']
            if not runs:
                continue
            summary = summarise_runs(bench['name'], runs, int(params['iterations']), mst)
            append_summary(summary, str(output_path), f"{alg_name}_SUMMARY")
            if runs[0]['fitness_log'] is not None:
                traces[alg_name] = runs[0]['fitness_log']
            for run in runs:
                all_rows.append({
                    'instance': bench['name'],
                    'algorithm': alg_name,
                    'seed': run['seed'],
                    'initial_fitness': run['initial_fitness'],
                    'fitness': run['fitness'],
                    'quality': run['quality'],
                    'runtime': run['runtime'],
                    'iterations': run['iterations'],
                })

        if optimal is not None:
            append_optimal_summary(bench['name'], optimal, str(output_path))

        if make_plots and traces:
            plot_fitness_traces(traces, str(output_path / f"{bench['name']}_traces.png"))

    if all_rows:
        df = pd.DataFrame(all_rows)
        df.to_csv(output_path / 'all_results.csv', index=False)
        print(f"\nSaved summary to {output_path / 'all_results.csv'}")

        if make_plots:
            print("\nCreating plots...")
            create_all_plots(df, str(output_path))

    if skipped:
        pd.DataFrame(skipped).to_csv(output_path / 'errors.csv', index=False)
        print(f"Skipped {len(skipped)} benchmarks, see {output_path / 'errors.csv'}")

    print(f"\nExperiments complete! Results saved to {output_dir}/")
