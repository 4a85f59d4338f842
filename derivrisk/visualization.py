"""Visualization utilities for simulated paths and percentile bands."""

import matplotlib
# Use non-interactive backend for headless environments
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
from typing import Optional
from pathlib import Path
from derivrisk.results import FxForwardResult
from derivrisk.statistics import StatsSeries


def _finish(fig, output_path: Optional[str], show_plot: bool) -> None:
    if output_path:
        output_path_abs = Path(output_path).resolve()
        output_path_abs.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(str(output_path_abs), dpi=300, bbox_inches='tight')

    if show_plot:
        plt.show()
    else:
        plt.close(fig)


def _draw_bands(ax, stats: StatsSeries, ylabel: str, color: str = 'blue') -> None:
    frame = stats.to_frame()
    ax.fill_between(
        frame.index,
        frame['p5'],
        frame['p95'],
        alpha=0.2,
        color=color,
        label='5th-95th Percentile',
    )
    ax.plot(
        frame.index,
        frame['mean'],
        color=f'dark{color}',
        linewidth=2,
        label='Mean',
    )
    ax.set_xlabel('Time (years)', fontsize=12)
    ax.set_ylabel(ylabel, fontsize=12)
    ax.legend(loc='best', fontsize=9)
    ax.grid(True, alpha=0.3)


def plot_paths(
    paths: np.ndarray,
    time_grid: np.ndarray,
    title: str = 'Simulated Paths',
    max_paths: int = 50,
    output_path: Optional[str] = None,
    show_plot: bool = False,
) -> None:
    """Plot a sample of paths together with the ensemble mean.

    Parameters
    ----------
    paths : np.ndarray
        Ensemble of shape (path_count, step_count + 1)
    time_grid : np.ndarray
        Time grid of the run
    title : str
        Chart title
    max_paths : int, default=50
        Maximum number of individual paths drawn
    output_path : str, optional
        Path to save the plot
    show_plot : bool, default=False
        Whether to display the plot
    """
    fig, ax = plt.subplots(figsize=(12, 8), dpi=150)

    for path in paths[:max_paths]:
        ax.plot(time_grid, path, alpha=0.3, color='blue', linewidth=0.5)

    ax.plot(
        time_grid,
        np.mean(paths, axis=0),
        color='darkblue',
        linewidth=2,
        label='Mean Path',
    )

    ax.set_title(f'{title} ({len(paths)} paths)', fontsize=14, fontweight='bold')
    ax.set_xlabel('Time (years)', fontsize=12)
    ax.set_ylabel('Value', fontsize=12)
    ax.legend(loc='best', fontsize=9)
    ax.grid(True, alpha=0.3)
    plt.tight_layout()

    _finish(fig, output_path, show_plot)


def plot_stats_bands(
    stats: StatsSeries,
    title: str = 'Percentile Bands',
    ylabel: str = 'Value',
    output_path: Optional[str] = None,
    show_plot: bool = False,
) -> None:
    """Plot the 5th-95th percentile band and the mean of a stats series."""
    fig, ax = plt.subplots(figsize=(12, 8), dpi=150)
    _draw_bands(ax, stats, ylabel)
    ax.set_title(title, fontsize=14, fontweight='bold')
    plt.tight_layout()

    _finish(fig, output_path, show_plot)


def plot_fx_forward(
    result: FxForwardResult,
    output_path: Optional[str] = None,
    show_plot: bool = False,
) -> None:
    """Plot spot and forward PV bands of an FX forward run.

    Parameters
    ----------
    result : FxForwardResult
        Result of an FX forward simulation
    output_path : str, optional
        Path to save the plot
    show_plot : bool, default=False
        Whether to display the plot
    """
    fig, (ax_spot, ax_pv) = plt.subplots(2, 1, figsize=(12, 10), dpi=150, sharex=True)

    _draw_bands(ax_spot, result.underlying_stats, 'Spot')
    ax_spot.axhline(
        y=result.forward_at_inception,
        color='red',
        linestyle='--',
        linewidth=1.5,
        label=f'Forward at T0: {result.forward_at_inception:.4f}',
    )
    ax_spot.legend(loc='best', fontsize=9)
    ax_spot.set_title('FX Spot', fontsize=14, fontweight='bold')

    _draw_bands(ax_pv, result.pv_stats, 'Present Value', color='green')
    ax_pv.axhline(y=0.0, color='gray', linestyle='--', linewidth=1)
    ax_pv.set_title('Forward Present Value', fontsize=14, fontweight='bold')

    plt.tight_layout()

    _finish(fig, output_path, show_plot)
