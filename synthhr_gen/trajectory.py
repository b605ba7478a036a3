from __future__ import annotations
import numpy as np
from .utils import colon_range, draw_jitter

# rest -> ramp -> near-peak plateau with perturbation -> dip -> recovery to peak
# -> plateau -> decline -> decline
N_SEGMENTS = 10

def trajectory_segments(resting_hr: float, submax_hr: float,
                        rng: np.random.Generator) -> list[tuple[float, float]]:
    """Return the 10 jittered (start, stop) pairs of one session's HR trend.

    Jitter is drawn left to right, segment by segment, so the random stream
    order is fixed for a given seed.
    """
    r, s = float(resting_hr), float(submax_hr)
    segs = []
    segs.append((r, r + draw_jitter(rng, 2, 8)))
    segs.append((r, r + draw_jitter(rng, 5, 15)))
    segs.append((r, s - draw_jitter(rng, 5, 15)))
    segs.append((s - draw_jitter(rng, 5, 15), (s - 10) - 10))
    start = (s - draw_jitter(rng, 5, 15)) - draw_jitter(rng, 5, 15)
    segs.append((start, s - draw_jitter(rng, 5, 15)))
    segs.append((s - draw_jitter(rng, 5, 15), s))
    segs.append((s, s - draw_jitter(rng, 2, 8)))
    segs.append((s, s - draw_jitter(rng, 2, 8)))
    segs.append((s, s - draw_jitter(rng, 10, 20)))
    start = s - draw_jitter(rng, 10, 30)
    segs.append((start, s - draw_jitter(rng, 30, 50)))
    return segs

def build_trajectory(resting_hr: float, submax_hr: float, rng: np.random.Generator) -> np.ndarray:
    """Concatenate the segment ranges into one variable-length target-HR trace.

    Boundary duplicates are kept on purpose; they show up as mid-trace noise.
    """
    parts = [colon_range(a, b) for a, b in trajectory_segments(resting_hr, submax_hr, rng)]
    return np.concatenate(parts)
