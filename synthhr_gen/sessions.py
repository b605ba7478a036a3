from __future__ import annotations

"""Per-session signal synthesis: noisy sampling, rate conversion, training effect.

The trajectory builder produces a trace of unpredictable length; everything in
here turns that into a fixed-length 1 Hz series. Functions are pure apart from
the random generator passed in.
"""

from math import gcd

import numpy as np
from scipy.signal import resample_poly

from .config import GeneratorConfig
from .trajectory import build_trajectory


def sample_noisy(trajectory: np.ndarray, sd: float, rng: np.random.Generator) -> np.ndarray:
    """One independent Gaussian draw per trajectory point, centred on that point."""
    means = np.asarray(trajectory, dtype=float)
    return rng.normal(loc=means, scale=sd, size=means.shape[0])


def resample_to_length(x: np.ndarray, target_length: int, padtype: str = "edge") -> np.ndarray:
    """Polyphase resample ``x`` to exactly ``target_length`` samples.

    The rate ratio is target_length / len(x), reduced to lowest terms so that
    ``resample_poly`` returns ceil(len(x) * up / down) == target_length.
    """
    x = np.asarray(x, dtype=float)
    n = int(x.shape[0])
    target_length = int(target_length)
    if n == 0:
        raise ValueError("Cannot resample an empty series.")
    if target_length <= 0:
        raise ValueError(f"target_length must be positive, got {target_length}")
    if n == target_length:
        return x.copy()

    g = gcd(target_length, n)
    up, down = target_length // g, n // g
    out = resample_poly(x, up, down, padtype=padtype)
    if out.shape[0] != target_length:
        raise ValueError(
            f"Resampler produced {out.shape[0]} samples, expected {target_length} (up={up}, down={down})"
        )
    return out


def apply_training_effect(series: np.ndarray, session_index: int, sd: float,
                          rng: np.random.Generator) -> np.ndarray:
    """Shift session ``j > 1`` down by N(-j, sd) noise drawn per sample.

    Session 1 is returned untouched and consumes no random draws.
    """
    if session_index < 1:
        raise ValueError(f"session_index is 1-based, got {session_index}")
    series = np.asarray(series, dtype=float)
    if session_index == 1:
        return series.copy()
    return series + rng.normal(loc=-float(session_index), scale=sd, size=series.shape[0])


def generate_session_series(resting_hr: float, submax_hr: float, session_index: int,
                            cfg: GeneratorConfig, rng: np.random.Generator) -> np.ndarray:
    traj = build_trajectory(resting_hr, submax_hr, rng)
    noisy = sample_noisy(traj, cfg.sample_sd, rng)
    per_second = resample_to_length(noisy, cfg.duration_seconds, padtype=cfg.resample_padtype)
    return apply_training_effect(per_second, session_index, cfg.training_effect_sd, rng)
