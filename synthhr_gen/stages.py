from __future__ import annotations
from typing import Iterable, Optional
import pandas as pd

from .errors import DivisibilityError, LengthMismatch
from .io import HR_COL, SECONDS_COL

GROUP_COLS = ["participant", "session"]


def window_long(long: pd.DataFrame, rest_seconds: int, exercise_seconds: int) -> pd.DataFrame:
    """Keep ``rest < elapsed_seconds <= rest + exercise`` (drops rest and recovery)."""
    sec = long[SECONDS_COL]
    mask = (sec > rest_seconds) & (sec <= rest_seconds + exercise_seconds)
    return long.loc[mask].reset_index(drop=True)


def check_divisible(window_length: int, stage_width: int) -> int:
    """Return the stage count, or raise if the window does not split evenly."""
    if stage_width <= 0:
        raise DivisibilityError(f"stage_width must be positive, got {stage_width}")
    n_stages, rem = divmod(int(window_length), int(stage_width))
    if rem != 0:
        raise DivisibilityError(
            f"Window of {window_length} s is not divisible into {stage_width} s stages "
            f"({window_length} / {stage_width} leaves {rem} s)"
        )
    return n_stages


def aggregate_stages(windowed: pd.DataFrame, stage_width: int, window_length: int,
                     rest_seconds: int) -> pd.DataFrame:
    """Mean heart rate per fixed-width stage, per participant and session.

    Stage numbers are computed from elapsed seconds (1-based), so a short
    session can never shift labels onto the wrong seconds.
    """
    n_stages = check_divisible(window_length, stage_width)

    counts = windowed.groupby(GROUP_COLS).size()
    short = counts[counts != window_length]
    if len(short):
        p, s = short.index[0]
        raise LengthMismatch(
            f"{len(short)} session(s) have a window of the wrong length; "
            f"e.g. P{p}_S{s} has {int(short.iloc[0])} samples, expected {window_length}"
        )

    df = windowed.copy()
    df["stage"] = (df[SECONDS_COL] - rest_seconds - 1) // stage_width + 1
    stages = (
        df.groupby(GROUP_COLS + ["stage"], as_index=False)[HR_COL]
        .mean()
        .sort_values(GROUP_COLS + ["stage"])
        .reset_index(drop=True)
    )
    stages["stage"] = stages["stage"].astype(int)
    per_group = stages.groupby(GROUP_COLS).size()
    uneven = per_group[per_group != n_stages]
    if len(uneven):
        p, s = uneven.index[0]
        raise LengthMismatch(
            f"{len(uneven)} session(s) do not cover all {n_stages} stages; "
            f"e.g. P{p}_S{s} has {int(uneven.iloc[0])}"
        )
    return stages


def select_stages(stages: pd.DataFrame, which: Optional[Iterable[int]] = None) -> pd.DataFrame:
    """Keep only the requested stages; by default the first and the last."""
    if which is None:
        which = [int(stages["stage"].min()), int(stages["stage"].max())]
    which = sorted(set(int(w) for w in which))
    missing = set(which) - set(stages["stage"].unique())
    if missing:
        raise ValueError(f"Requested stages not present: {sorted(missing)}")
    return stages[stages["stage"].isin(which)].reset_index(drop=True)


def summarize_stages(stages: pd.DataFrame) -> pd.DataFrame:
    """Coarse per-stage summary across participants, per session."""
    return (
        stages.groupby(["session", "stage"])[HR_COL]
        .agg(mean="mean", sd="std", min="min", max="max", n="size")
        .reset_index()
        .sort_values(["session", "stage"])
        .reset_index(drop=True)
    )
