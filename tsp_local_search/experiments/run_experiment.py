"""CLI experiment runner with organized directory structure."""

import argparse
import glob
import shutil
from pathlib import Path
from typing import Optional
import time

from .run_all import run_all_experiments, ALGORITHMS, DEFAULT_PARAMS


def _with_optimal_tours(matrix_files):
    """Matrix files plus any ``<name>_OPT.txt`` tours that sit beside them."""
    files = []
    for f in matrix_files:
        path = Path(f)
        files.append(path)
        if not path.stem.endswith('_OPT'):
            opt = path.with_name(f"{path.stem}_OPT.txt")
            if opt.exists():
                files.append(opt)
    return sorted(set(files))


def setup_experiment(
    instances_source: Optional[str] = None,
    experiment_name: Optional[str] = None,
    copy_instances: bool = True,
    base_dir: str = 'experiments',
) -> tuple[Path, Path]:
    """
    Set up experiment directories.

    Args:
        instances_source: Path to source matrices (directory, glob pattern, or
            single .txt file). If None, an empty instances directory is created.
        experiment_name: Name for experiment (default: based on source)
        copy_instances: If True, copy matrices (and optimal tours) into the
            experiment directory
        base_dir: Root directory holding all experiments

    Returns:
        Tuple of (instances_dir, output_dir)
    """
    instance_files = []
    base_name = 'unnamed'

    if instances_source is not None:
        source_path = Path(instances_source)

        if source_path.is_file() and source_path.suffix == '.txt':
            instance_files = [str(source_path)]
            base_name = source_path.stem
        elif source_path.is_dir():
            instance_files = glob.glob(str(source_path / '*.txt'))
            base_name = source_path.name
        elif '*' in instances_source:
            instance_files = glob.glob(instances_source)
            base_name = instances_source.replace('*', '').replace('/', '_').replace('\\', '_').strip('_')
            if not base_name or base_name == '_':
                base_name = 'filtered'
        else:
            raise ValueError(f"Invalid instances source: {instances_source}")

        if not instance_files:
            raise ValueError(f"No matrix files found matching: {instances_source}")

    if experiment_name is None:
        experiment_name = base_name

    experiment_dir = Path(base_dir) / experiment_name
    instances_dir = experiment_dir / 'instances'
    output_dir = experiment_dir / 'results'

    instances_dir.mkdir(parents=True, exist_ok=True)
    output_dir.mkdir(parents=True, exist_ok=True)

    if instance_files:
        if not copy_instances and Path(instances_source).is_dir():
            instances_dir = Path(instances_source)
        else:
            copied = _with_optimal_tours(instance_files)
            for src_file in copied:
                shutil.copy2(src_file, instances_dir / src_file.name)
            print(f"Copied {len(copied)} files to {instances_dir}")

    return instances_dir, output_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Run local-search heuristics on TSP distance matrices',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run on every matrix in a directory
  python -m tsp_local_search.experiments.run_experiment data/ --name full

  # Run on a subset with custom parameters
  python -m tsp_local_search.experiments.run_experiment "data/TSP_4*.txt" --name small \\
    --resamples 10 --iterations 50000 --inner-iterations 1000 --workers 4
        """
    )

    parser.add_argument(
        'instances',
        type=str,
        help='Path to matrices: directory, glob pattern (e.g., "data/TSP_4*.txt"), or single file'
    )
    parser.add_argument(
        '--name',
        type=str,
        default=None,
        help='Experiment name (default: based on source)'
    )
    parser.add_argument(
        '--no-copy',
        action='store_true',
        help='Do not copy matrices (use source directory directly)'
    )
    parser.add_argument(
        '--algorithm',
        dest='algorithms',
        action='append',
        choices=list(ALGORITHMS),
        help='Heuristic to run (can be given multiple times). Default: all four.'
    )
    parser.add_argument(
        '--resamples',
        type=int,
        default=DEFAULT_PARAMS['resamples'],
        help=f"Independent runs per heuristic and matrix (default: {DEFAULT_PARAMS['resamples']})"
    )
    parser.add_argument(
        '--iterations',
        type=int,
        default=DEFAULT_PARAMS['iterations'],
        help=f"Iteration budget per run (default: {DEFAULT_PARAMS['iterations']})"
    )
    parser.add_argument(
        '--inner-iterations',
        type=int,
        default=DEFAULT_PARAMS['inner_iterations'],
        help=f"RRHC inner RMHC iterations (default: {DEFAULT_PARAMS['inner_iterations']})"
    )
    parser.add_argument(
        '--shc-constant',
        type=float,
        default=DEFAULT_PARAMS['shc_constant'],
        help='SHC convergence parameter as a fraction of the MST cost'
    )
    parser.add_argument(
        '--sa-start-factor',
        type=float,
        default=DEFAULT_PARAMS['sa_start_factor'],
        help='SA starting temperature as a fraction of the MST cost'
    )
    parser.add_argument(
        '--sa-end-factor',
        type=float,
        default=DEFAULT_PARAMS['sa_end_factor'],
        help='SA final temperature as a fraction of the MST cost'
    )
    parser.add_argument(
        '--maximise',
        action='store_true',
        help='Maximise tour length instead of minimising it'
    )
    parser.add_argument(
        '--seed-with-optimal',
        action='store_true',
        help='Start every run from the <name>_OPT.txt tour when one exists'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=4,
        help='Worker processes per matrix (default: 4; 1 runs sequentially)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=42,
        help='Base random seed (default: 42)'
    )
    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='Skip plot generation'
    )
    return parser


def main(argv=None):
    """CLI entry point for running experiments."""
    args = build_parser().parse_args(argv)

    print(f"\n{'='*70}")
    print(f"Setting up experiment: {args.name or 'unnamed'}")
    print(f"{'='*70}")

    instances_dir, output_dir = setup_experiment(
        args.instances,
        experiment_name=args.name,
        copy_instances=not args.no_copy
    )

    print(f"Instances directory: {instances_dir}")
    print(f"Results directory: {output_dir}")

    params = {
        'resamples': args.resamples,
        'iterations': args.iterations,
        'inner_iterations': args.inner_iterations,
        'shc_constant': args.shc_constant,
        'sa_start_factor': args.sa_start_factor,
        'sa_end_factor': args.sa_end_factor,
        'objective': 'maximise' if args.maximise else 'minimise',
    }
    algorithms = args.algorithms or list(ALGORITHMS)

    print(f"\nAlgorithm parameters:")
    print(f"  Algorithms: {', '.join(algorithms)}")
    print(f"  Resamples: {params['resamples']}, iterations: {params['iterations']}, objective: {params['objective']}")
    print(f"  RRHC: inner_iterations={params['inner_iterations']}")
    print(f"  SHC: constant={params['shc_constant']}")
    print(f"  SA: start_factor={params['sa_start_factor']}, end_factor={params['sa_end_factor']}")

    print(f"\n{'='*70}")
    print("Running experiments...")
    print(f"{'='*70}\n")

    start_time = time.time()

    run_all_experiments(
        instances_dir=str(instances_dir),
        output_dir=str(output_dir),
        params=params,
        algorithms=algorithms,
        seed=args.seed,
        workers=args.workers,
        seed_with_optimal=args.seed_with_optimal,
        make_plots=not args.no_plots,
    )

    elapsed = time.time() - start_time

    print(f"\n{'='*70}")
    print(f"Experiment complete!")
    print(f"Total time: {elapsed:.1f} seconds ({elapsed/60:.1f} minutes)")
    print(f"Results saved to: {output_dir}")
    print(f"{'='*70}")


if __name__ == '__main__':
    main()
