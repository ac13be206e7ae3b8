"""Run a *small* synthetic experiment using the experiments/<name> layout.

This script:
- Creates a fresh experiment directory under ``experiments/`` with a
  descriptive name encoding the instance sizes.
- Generates Euclidean matrices (and exact tours for the smallest ones)
  under ``instances/`` inside the experiment folder.
- Runs all heuristics and stores results under ``results/``.
"""

from datetime import datetime
import argparse

from .run_all import run_all_experiments
from .run_experiment import setup_experiment
from ..model.instance_generator import generate_instance_set


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Run a small experiment (10/20/48-node instances) in a fresh experiments/ folder."
    )
    parser.add_argument('--resamples', type=int, default=5, help='Runs per heuristic (default: 5)')
    parser.add_argument('--iterations', type=int, default=10000, help='Iterations per run (default: 10000)')
    parser.add_argument('--workers', type=int, default=4, help='Worker processes (default: 4)')
    args = parser.parse_args(argv)

    sizes = (10, 20, 48)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    experiment_name = f"small_{'-'.join(str(n) for n in sizes)}nodes_{timestamp}"

    instances_dir, results_dir = setup_experiment(experiment_name=experiment_name)

    generate_instance_set(str(instances_dir), sizes=sizes, n_per_size=1, exact_max_nodes=10)

    run_all_experiments(
        instances_dir=str(instances_dir),
        output_dir=str(results_dir),
        params={
            'resamples': args.resamples,
            'iterations': args.iterations,
            'inner_iterations': max(1, args.iterations // 20),
        },
        workers=args.workers,
    )


if __name__ == '__main__':
    main()
