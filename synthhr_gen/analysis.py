from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from .config import AnalysisConfig
from .reshape import collect_dataset, to_long, validate_long
from .stages import aggregate_stages, check_divisible, select_stages, summarize_stages, window_long
from .store import FileStore

logger = logging.getLogger(__name__)


def analyze_dataset(cfg: AnalysisConfig, store: FileStore, project: str, out_dir: str,
                    staging_dir: Optional[str] = None) -> dict:
    """Fetch, reshape, validate and stage-aggregate a generated study.

    Raises ``LengthMismatch`` or ``DivisibilityError`` before anything is
    aggregated if the data or the stage layout is inconsistent.
    """
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    # fail on a bad stage layout before touching the store
    check_divisible(cfg.window_seconds, cfg.stage_width)

    wide = collect_dataset(store, project, staging_dir=staging_dir)
    long = validate_long(to_long(wide), cfg.duration_seconds)
    logger.info("Long table: %d rows, %d participants, %d sessions",
                len(long), long["participant"].nunique(), long["session"].nunique())

    windowed = window_long(long, cfg.rest_seconds, cfg.exercise_seconds)
    stages = aggregate_stages(windowed, cfg.stage_width, cfg.window_seconds, cfg.rest_seconds)
    selected = select_stages(stages, cfg.compare_stages)
    summary = summarize_stages(stages)

    outputs = {
        "long_table": out_path / "long_table.csv",
        "stages": out_path / "stages.csv",
        "stage_comparison": out_path / "stage_comparison.csv",
        "stage_summary": out_path / "stage_summary.csv",
    }
    long.to_csv(outputs["long_table"], index=False)
    stages.to_csv(outputs["stages"], index=False)
    selected.to_csv(outputs["stage_comparison"], index=False)
    summary.to_csv(outputs["stage_summary"], index=False)

    if cfg.make_plots:
        from .plots import plot_long_table, plot_stage_comparison

        outputs["long_table_plot"] = plot_long_table(windowed, out_path / "exercise_window.png")
        outputs["stage_comparison_plot"] = plot_stage_comparison(selected, out_path / "stage_comparison.png")

    return {
        "long": long,
        "stages": stages,
        "selected": selected,
        "summary": summary,
        "outputs": {k: str(v) for k, v in outputs.items()},
    }
