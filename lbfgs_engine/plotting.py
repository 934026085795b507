"""
Plotting utilities for optimisation traces.
"""

from typing import Optional, Union

import matplotlib.pyplot as plt
import pandas as pd

from .logger import TraceLogger


def plot_convergence(
    trace: Union[TraceLogger, pd.DataFrame],
    title: str = "L-BFGS Convergence",
    save_path: Optional[str] = None,
    tolerance: Optional[float] = None,
):
    """
    Plot gradient norm and accepted step length per iteration.

    Args:
        trace: TraceLogger or a DataFrame with iteration/grad_norm/step_length columns
        title: Plot title
        save_path: Optional path to save plot
        tolerance: If given, draw the convergence threshold on the gradient panel

    Returns:
        The matplotlib Figure
    """
    df = trace.to_dataframe() if isinstance(trace, TraceLogger) else trace
    if df.empty:
        raise ValueError("Cannot plot an empty trace")

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    ax1.semilogy(df["iteration"], df["grad_norm"], color="blue", linewidth=2, label="||grad||")
    if tolerance is not None:
        ax1.axhline(tolerance, color="gray", linestyle="--", label="tolerance")
    ax1.set_ylabel("Gradient norm")
    ax1.set_title(title)
    ax1.legend()
    ax1.grid(True, alpha=0.3)

    ax2.semilogy(df["iteration"], df["step_length"], color="red", marker="o", markersize=3)
    ax2.set_xlabel("Iteration")
    ax2.set_ylabel("Step length")
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Convergence plot saved to {save_path}")
    return fig
