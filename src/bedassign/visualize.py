"""
Side-by-side bars comparing algorithm runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib

# Use a non-interactive backend to avoid display issues in headless environments.
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .metrics import results_to_dataframe  # noqa: E402
from .models import AllocationResult  # noqa: E402


def plot_comparison(results: Sequence[AllocationResult], outfile: Optional[Path] = None) -> None:
    df = results_to_dataframe(results).set_index("algorithm")
    fig, axes = plt.subplots(1, 2, figsize=(12, 4))

    df["execution_time_ms"].plot(kind="barh", ax=axes[0], color="tab:blue")
    axes[0].set_title("Execution time")
    axes[0].set_xlabel("ms")

    df["efficiency_score"].plot(kind="barh", ax=axes[1], color="tab:green")
    axes[1].set_title("Efficiency score")
    axes[1].set_xlim(0, 100)

    plt.tight_layout()
    if outfile:
        plt.savefig(outfile, dpi=150)
    else:
        plt.show()
    plt.close(fig)
