# -*- coding: utf-8 -*-
"""
Spectrum Plots
==============

Bar chart of level dimensionalities produced by a branching engine.
"""

from pathlib import Path
from typing import Hashable, Mapping, Optional, Union

import matplotlib.pyplot as plt
import numpy as np


def _label(weight: Hashable) -> str:
    if isinstance(weight, tuple):
        return "(" + ",".join(str(f) for f in weight) + ")"
    return str(weight)


def plot_level_dimensionalities(
    dims: Mapping[Hashable, int],
    save_path: Union[str, Path],
    *,
    title: Optional[str] = None,
    xlabel: str = "weight",
) -> Path:
    """
    Save a bar chart of weight -> level dimensionality.

    Args:
        dims: Weight -> D (only nonzero entries are usually passed)
        save_path: Output image file; parent directories are created
        title: Figure title
        xlabel: Axis label for the weights

    Returns:
        Path of the written file
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    weights = sorted(dims)
    values = np.array([dims[w] for w in weights], dtype=np.int64)
    positions = np.arange(len(weights))

    fig, ax = plt.subplots(figsize=(max(6.0, 0.35 * len(weights)), 4.0))
    ax.bar(positions, values, color='steelblue', edgecolor='black', linewidth=0.5)
    ax.set_xticks(positions)
    ax.set_xticklabels([_label(w) for w in weights],
                       rotation=90 if len(weights) > 12 else 0, fontsize=8)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("level dimensionality D")
    if title:
        ax.set_title(title)
    ax.grid(axis='y', alpha=0.3)

    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return save_path
