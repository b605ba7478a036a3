"""
Pytest configuration and fixtures.

Figures are rendered with the non-interactive Agg backend; nothing is shown.
"""
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from synthhr_gen.config import AnalysisConfig, GeneratorConfig
from synthhr_gen.store import LocalFileStore


@pytest.fixture
def small_cfg():
    """2 participants x 2 sessions, default 2400 s sessions, fixed seed."""
    return GeneratorConfig(seed=1234, n_participants=2, n_sessions=2)


@pytest.fixture
def analysis_cfg():
    return AnalysisConfig(make_plots=False)


@pytest.fixture
def local_store(tmp_path):
    return LocalFileStore(tmp_path / "store")
