"""Plotting functions for experiment results."""

import matplotlib.pyplot as plt
import pandas as pd
from pathlib import Path
from typing import Dict, List


def plot_fitness_traces(traces: Dict[str, List[float]], output_path: str = 'results/traces.png'):
    """
    Plot the fitness trace of one run per algorithm.

    Args:
        traces: Dictionary mapping algorithm name to fitness per iteration
        output_path: Path to save plot
    """
    if not traces:
        print("No trace data to plot")
        return

    plt.figure(figsize=(10, 6))
    for alg_name, trace in traces.items():
        # RRHC has far fewer (outer) iterations; plot on a shared 0..1 axis
        n = max(1, len(trace) - 1)
        plt.plot([i / n for i in range(len(trace))], trace, label=alg_name)
    plt.xlabel('Fraction of Iteration Budget')
    plt.ylabel('Tour Length')
    plt.title('Fitness Trace')
    plt.legend(title='Algorithm')
    plt.tight_layout()

    Path(output_path).parent.mkdir(exist_ok=True, parents=True)
    plt.savefig(output_path)
    plt.close()
    print(f"Saved plot to {output_path}")


def plot_quality_by_instance(results_df: pd.DataFrame, output_path: str = 'results/quality_by_instance.png'):
    """
    Bar chart of mean solution quality per algorithm for each instance.

    Args:
        results_df: DataFrame with columns: algorithm, instance, quality
        output_path: Path to save plot
    """
    if results_df.empty:
        print("No data to plot")
        return

    pivot = results_df.pivot_table(values='quality', index='instance', columns='algorithm', aggfunc='mean')

    pivot.plot(kind='bar', figsize=(12, 6))
    plt.ylabel('Mean Solution Quality (% of MST)')
    plt.xlabel('Instance')
    plt.title('Solution Quality by Algorithm and Instance')
    plt.legend(title='Algorithm')
    plt.xticks(rotation=45)
    plt.tight_layout()

    Path(output_path).parent.mkdir(exist_ok=True, parents=True)
    plt.savefig(output_path)
    plt.close()
    print(f"Saved plot to {output_path}")


def create_all_plots(results_df: pd.DataFrame, output_dir: str = 'results'):
    """
    Create all summary plots from per-run results.

    Args:
        results_df: DataFrame with columns: instance, algorithm, fitness, quality, runtime
        output_dir: Directory to save plots
    """
    Path(output_dir).mkdir(exist_ok=True, parents=True)

    if results_df is None or results_df.empty:
        print("No data to plot")
        return

    if 'quality' in results_df.columns:
        plt.figure(figsize=(10, 6))
        results_df.boxplot(column='quality', by='algorithm', ax=plt.gca())
        plt.ylabel('Solution Quality (% of MST)')
        plt.title('Solution Quality Across Algorithms')
        plt.suptitle('')  # Remove default title
        plt.xticks(rotation=45)
        plt.tight_layout()
        plt.savefig(f'{output_dir}/quality_comparison.png')
        plt.close()
        print(f"Saved plot to {output_dir}/quality_comparison.png")

    if 'runtime' in results_df.columns:
        plt.figure(figsize=(10, 6))
        results_df.groupby('algorithm')['runtime'].mean().plot(kind='bar')
        plt.ylabel('Runtime (seconds)')
        plt.title('Runtime Comparison')
        plt.xticks(rotation=45)
        plt.yscale('log')
        plt.tight_layout()
        plt.savefig(f'{output_dir}/runtime_comparison.png')
        plt.close()
        print(f"Saved plot to {output_dir}/runtime_comparison.png")

    plot_quality_by_instance(results_df, f'{output_dir}/quality_by_instance.png')
