from __future__ import annotations
import hashlib
from pathlib import Path
import numpy as np

def draw_jitter(rng: np.random.Generator, low: int, high: int) -> int:
    # inclusive on both ends
    return int(rng.integers(low, high + 1))

def colon_range(start: float, stop: float) -> np.ndarray:
    """Unit-step sequence from ``start`` towards ``stop``, inclusive where it lands.

    The sequence is anchored at ``start`` (fractional starts keep their fraction)
    and counts down when ``stop < start``. ``start == stop`` gives one value.
    """
    start = float(start)
    stop = float(stop)
    n = int(np.floor(abs(stop - start) + 1e-10)) + 1
    step = 1.0 if stop >= start else -1.0
    return start + step * np.arange(n, dtype=float)

def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024*1024), b""):
            h.update(chunk)
    return h.hexdigest()
