from __future__ import annotations

"""Configuration for the synthetic training-study heart-rate generator and analyzer.

Defaults reproduce the demonstration study: 10 participants x 10 sessions,
5 min rest + 30 min exercise + 5 min recovery sampled once per second.
"""

from dataclasses import dataclass, asdict, field
from typing import Literal, Dict, Any, List, Optional
import json


StoreKind = Literal["local", "osf"]


def _load_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _dump_json(data: Dict[str, Any], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


@dataclass
class GeneratorConfig:
    # ---- dataset shape ----
    seed: int = 20211009
    n_participants: int = 10
    n_sessions: int = 10

    # ---- session timing (seconds, 1 Hz) ----
    rest_seconds: int = 5 * 60
    exercise_seconds: int = 30 * 60
    recovery_seconds: int = 5 * 60

    # ---- participant profiles ----
    resting_hr_mean: float = 60.0
    resting_hr_sd: float = 10.0
    submax_hr_mean: float = 150.0
    submax_hr_sd: float = 15.0

    # ---- per-sample noise ----
    sample_sd: float = 10.0          # around each trajectory point
    training_effect_sd: float = 2.0  # per-second spread of the session offset (mean = -session)

    # edge handling for the polyphase filter (scipy.signal.resample_poly padtype)
    resample_padtype: str = "edge"

    @property
    def duration_seconds(self) -> int:
        return int(self.rest_seconds + self.exercise_seconds + self.recovery_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, path: str) -> None:
        _dump_json(self.to_dict(), path)

    @staticmethod
    def from_json(path: str) -> "GeneratorConfig":
        return GeneratorConfig(**_load_json(path))


@dataclass
class AnalysisConfig:
    rest_seconds: int = 5 * 60
    exercise_seconds: int = 30 * 60
    recovery_seconds: int = 5 * 60

    # width of the coarse stages the exercise window is averaged into
    stage_width: int = 180
    # stage numbers kept for the comparison output; None = first and last
    compare_stages: Optional[List[int]] = None

    make_plots: bool = True

    @property
    def duration_seconds(self) -> int:
        return int(self.rest_seconds + self.exercise_seconds + self.recovery_seconds)

    @property
    def window_seconds(self) -> int:
        return int(self.exercise_seconds)

    @property
    def n_stages(self) -> int:
        """Stages per session; only meaningful once divisibility has been checked."""
        return int(self.window_seconds // self.stage_width)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, path: str) -> None:
        _dump_json(self.to_dict(), path)

    @staticmethod
    def from_json(path: str) -> "AnalysisConfig":
        return AnalysisConfig(**_load_json(path))


@dataclass
class StoreConfig:
    kind: StoreKind = "local"
    # OSF node id (e.g. "rs8kz") or, for the local store, a directory name under root
    project: str = "study"
    root: str = "./store"

    # ---- OSF ----
    token_env: str = "OSF_TOKEN"
    api_url: str = "https://api.osf.io/v2"
    files_url: str = "https://files.osf.io/v1"
    timeout: float = 30.0
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_json(path: str) -> "StoreConfig":
        return StoreConfig(**_load_json(path))
