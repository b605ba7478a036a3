"""End-to-end tests: generate into a local store, then collect and analyze."""
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest

from synthhr_gen.analysis import analyze_dataset
from synthhr_gen.config import AnalysisConfig
from synthhr_gen.errors import DivisibilityError, LengthMismatch
from synthhr_gen.io import write_session_csv
from synthhr_gen.pipeline import generate_dataset


@pytest.fixture
def populated_store(small_cfg, tmp_path, local_store):
    generate_dataset(small_cfg, out_dir=str(tmp_path / "gen"), store=local_store, project="study",
                     run_checks=False)
    return local_store


def test_analysis_outputs(populated_store, analysis_cfg, tmp_path):
    res = analyze_dataset(analysis_cfg, populated_store, "study", out_dir=str(tmp_path / "analysis"))

    assert len(res["long"]) == 4 * 2400
    assert (res["stages"].groupby(["participant", "session"]).size() == 10).all()
    assert len(res["selected"]) == 4 * 2
    assert set(res["summary"]["stage"]) == set(range(1, 11))
    for key in ("long_table", "stages", "stage_comparison", "stage_summary"):
        assert Path(res["outputs"][key]).exists()
    assert "stage_comparison_plot" not in res["outputs"]


def test_analysis_renders_figures(populated_store, tmp_path):
    cfg = AnalysisConfig(make_plots=True)
    res = analyze_dataset(cfg, populated_store, "study", out_dir=str(tmp_path / "analysis"))

    for key in ("long_table_plot", "stage_comparison_plot"):
        path = Path(res["outputs"][key])
        assert path.exists() and path.stat().st_size > 0


def test_analysis_with_explicit_comparison_stages(populated_store, tmp_path):
    cfg = AnalysisConfig(make_plots=False, compare_stages=[1, 5, 10])
    res = analyze_dataset(cfg, populated_store, "study", out_dir=str(tmp_path / "analysis"))
    assert sorted(res["selected"]["stage"].unique()) == [1, 5, 10]


def test_indivisible_stage_width_fails_before_fetching(tmp_path):
    store = MagicMock()
    cfg = AnalysisConfig(stage_width=170, make_plots=False)

    with pytest.raises(DivisibilityError):
        analyze_dataset(cfg, store, "study", out_dir=str(tmp_path))
    store.list_files.assert_not_called()


def test_short_session_halts_before_aggregation(populated_store, tmp_path, analysis_cfg):
    bad = tmp_path / "P1_S2.csv"
    write_session_csv(np.full(2399, 120.0), bad)
    populated_store.upload("study", bad)
    out = tmp_path / "analysis"

    with pytest.raises(LengthMismatch):
        analyze_dataset(analysis_cfg, populated_store, "study", out_dir=str(out))
    assert not (out / "stages.csv").exists()
