"""Summary statistics and CSV reports for heuristic runs."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

SUMMARY_COLUMNS = [
    'Sample', 'Resamples',
    'Fitness (min)', 'Fitness (max)', 'Fitness (range)', 'Fitness (mean)',
    'Sol Quality (min)', 'Sol Quality (max)', 'Sol Quality (range)', 'Sol Quality (mean)',
    'Initial Fitness', 'Iterations',
    'Quickest Run (s)', 'Slowest Run (s)', 'Run Range (s)', 'Average Run (s)',
    'MST',
]

OPTIMAL_COLUMNS = ['Sample', 'Optimal Fitness', 'Optimal Solution Quality', 'MST Cost']


def _min_max_range_mean(values: List[float]):
    arr = np.asarray(values, dtype=float)
    lo, hi = float(arr.min()), float(arr.max())
    return lo, hi, hi - lo, float(arr.mean())


def summarise_runs(
    sample_name: str,
    runs: List[Dict[str, Any]],
    iterations: int,
    mst: float,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Aggregate resamples of one heuristic on one benchmark into a summary row.

    Args:
        sample_name: Benchmark name
        runs: Results from run_resamples (each with fitness, quality, runtime)
        iterations: Iteration budget the runs were given
        mst: MST cost of the benchmark
        extra: Additional columns appended after the standard ones; defaults
            to the strategy parameters recorded in the first run

    Returns:
        Ordered dictionary with SUMMARY_COLUMNS followed by the extra columns

    Raises:
        ValueError: if `runs` is empty
    """
    if not runs:
        raise ValueError(f"No runs to summarise for {sample_name}")

    fit = _min_max_range_mean([r['fitness'] for r in runs])
    qual = _min_max_range_mean([r['quality'] for r in runs])
    time_ = _min_max_range_mean([r['runtime'] for r in runs])

    row = dict(zip(SUMMARY_COLUMNS, [
        sample_name, len(runs),
        *fit,
        *qual,
        float(np.mean([r['initial_fitness'] for r in runs])), iterations,
        *time_,
        mst,
    ]))

    if extra is None:
        extra = runs[0].get('parameters') or {}
    row.update(extra)
    return row


def append_summary(row: Dict[str, Any], output_dir: str, log_name: str) -> Path:
    """
    Append one summary row to ``<output_dir>/<log_name>.csv``.

    The header is written only when the file is created.
    """
    path = Path(output_dir) / f"{log_name}.csv"
    path.parent.mkdir(exist_ok=True, parents=True)
    pd.DataFrame([row]).to_csv(path, mode='a', header=not path.exists(), index=False)
    print(f"Saved summary row for {row.get('Sample')} to {path}")
    return path


def append_optimal_summary(sample_name: str, optimal: Dict[str, float], output_dir: str) -> Path:
    """Record a known-optimal tour's fitness, quality and MST in SUMMARIES.csv."""
    row = dict(zip(OPTIMAL_COLUMNS, [
        sample_name, optimal['fitness'], optimal['quality'], optimal['mst'],
    ]))
    return append_summary(row, output_dir, 'SUMMARIES')
