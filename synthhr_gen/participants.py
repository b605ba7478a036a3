from __future__ import annotations
import numpy as np
import pandas as pd
from .config import GeneratorConfig

def generate_participants(cfg: GeneratorConfig, rng: np.random.Generator) -> pd.DataFrame:
    """Draw one resting and one submaximal HR per participant.

    All resting values are drawn before any submax value, and both before any
    session, which keeps the seeded stream reproducible.
    """
    n = cfg.n_participants
    participant_id = np.arange(1, n+1, dtype=int)
    resting_hr = rng.normal(cfg.resting_hr_mean, cfg.resting_hr_sd, size=n)
    submax_hr = rng.normal(cfg.submax_hr_mean, cfg.submax_hr_sd, size=n)
    return pd.DataFrame({
        "participant_id": participant_id,
        "resting_hr": resting_hr,
        "submax_hr": submax_hr,
    })
