from __future__ import annotations

"""Figures for the collected dataset.

Both figures facet by participant and colour by session. The callers decide
the backend; tests force ``Agg``.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .io import HR_COL, SECONDS_COL


def _with_session_labels(df: pd.DataFrame) -> tuple[pd.DataFrame, list[str]]:
    out = df.copy()
    order = [str(s) for s in sorted(out["session"].unique())]
    out["session"] = out["session"].astype(str)
    return out, order


def _col_wrap(df: pd.DataFrame) -> int:
    return min(5, max(1, df["participant"].nunique()))


def plot_long_table(long: pd.DataFrame, out_path: Path) -> Path:
    """Per-second heart rate, one panel per participant (large; slow with many sessions)."""
    data, order = _with_session_labels(long)
    g = sns.relplot(
        data=data, x=SECONDS_COL, y=HR_COL,
        hue="session", hue_order=order, palette="husl",
        col="participant", col_wrap=_col_wrap(data),
        kind="scatter", alpha=0.2, s=4, linewidth=0,
        height=3, aspect=1.3,
    )
    g.set_axis_labels("Elapsed time (s)", "Heart rate (beats/min)")
    g.set_titles("Participant {col_name}")
    out_path = Path(out_path)
    g.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(g.figure)
    return out_path


def plot_stage_comparison(selected: pd.DataFrame, out_path: Path) -> Path:
    """Stage means for the selected stages, a line per session."""
    data, order = _with_session_labels(selected)
    g = sns.relplot(
        data=data, x="stage", y=HR_COL,
        hue="session", hue_order=order, palette="husl",
        col="participant", col_wrap=_col_wrap(data),
        kind="line", marker="o", alpha=0.8,
        height=3, aspect=1.0,
    )
    stages = sorted(selected["stage"].unique())
    for ax in g.axes.flat:
        ax.set_xticks(stages)
    g.set_axis_labels("Stage", "Mean heart rate (beats/min)")
    g.set_titles("Participant {col_name}")
    out_path = Path(out_path)
    g.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(g.figure)
    return out_path
