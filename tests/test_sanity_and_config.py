"""Tests for the sanity report and config JSON handling."""
import numpy as np
import pandas as pd

from synthhr_gen.config import AnalysisConfig, GeneratorConfig, StoreConfig
from synthhr_gen.pipeline import generate_wide_table
from synthhr_gen.sanity import run_sanity_checks


def test_sanity_report_on_generated_data(small_cfg):
    participants, wide = generate_wide_table(small_cfg, np.random.default_rng(small_cfg.seed))
    report = run_sanity_checks(wide, participants, small_cfg)

    names = [c["name"] for c in report["checks"]]
    assert "Series length" in names
    assert "Training effect direction" in names
    assert report["summary"]["sessions"] == 4
    assert report["summary"]["samples_per_session"] == 2400


def test_sanity_flags_short_series_without_raising(small_cfg):
    participants = pd.DataFrame({"participant_id": [1], "resting_hr": [60.0], "submax_hr": [150.0]})
    wide = pd.DataFrame({"P1_S1": np.full(2400, 100.0), "P1_S2": np.r_[np.full(2399, 95.0), np.nan]})

    report = run_sanity_checks(wide, participants, small_cfg)

    by_name = {c["name"]: c for c in report["checks"]}
    assert not by_name["Series length"]["ok"]
    assert not by_name["No missing samples"]["ok"]
    assert by_name["Training effect direction"]["ok"]
    assert report["summary"]["ok"] is False


def test_generator_config_json_round_trip(tmp_path):
    cfg = GeneratorConfig(seed=7, n_participants=3, rest_seconds=60)
    path = tmp_path / "cfg.json"
    cfg.to_json(str(path))

    loaded = GeneratorConfig.from_json(str(path))

    assert loaded == cfg
    assert loaded.duration_seconds == 60 + 1800 + 300


def test_analysis_config_derived_values(tmp_path):
    cfg = AnalysisConfig(stage_width=300, compare_stages=[1, 6])
    path = tmp_path / "analysis.json"
    cfg.to_json(str(path))

    loaded = AnalysisConfig.from_json(str(path))

    assert loaded == cfg
    assert loaded.duration_seconds == 2400
    assert loaded.window_seconds == 1800
    assert loaded.n_stages == 6


def test_store_config_defaults():
    cfg = StoreConfig()
    assert cfg.kind == "local"
    assert cfg.token_env == "OSF_TOKEN"
