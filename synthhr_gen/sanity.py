from __future__ import annotations
import numpy as np
import pandas as pd
from .config import GeneratorConfig
from .io import parse_session_name

HR_PLAUSIBLE_MIN = 30.0
HR_PLAUSIBLE_MAX = 230.0

def _pct_nan(df: pd.DataFrame) -> float:
    return float(df.isna().to_numpy().mean()) if df.size else 0.0

def run_sanity_checks(wide: pd.DataFrame, participants: pd.DataFrame, cfg: GeneratorConfig) -> dict:
    """Lightweight sanity checks designed to catch obvious realism regressions.

    Returns a JSON-serializable dict with metrics + pass/fail flags. Failed
    checks are reported, never raised.
    """
    report = {"summary": {}, "checks": []}

    report["summary"]["participants"] = int(participants.shape[0])
    report["summary"]["sessions"] = int(wide.shape[1])
    report["summary"]["samples_per_session"] = int(wide.shape[0])

    def add_check(name, ok, details):
        report["checks"].append({"name": name, "ok": bool(ok), "details": details})

    lengths = wide.notna().sum(axis=0)
    add_check("Series length", bool((lengths == cfg.duration_seconds).all()), {
        "expected": int(cfg.duration_seconds),
        "min": int(lengths.min()) if len(lengths) else None,
        "max": int(lengths.max()) if len(lengths) else None,
    })

    pct_nan = _pct_nan(wide)
    add_check("No missing samples", pct_nan == 0.0, {"pct_nan": pct_nan})

    values = wide.to_numpy(dtype=float).ravel()
    values = values[np.isfinite(values)]
    if len(values):
        in_range = float(((values >= HR_PLAUSIBLE_MIN) & (values <= HR_PLAUSIBLE_MAX)).mean())
        add_check("HR range", in_range > 0.99, {
            "min": float(values.min()),
            "max": float(values.max()),
            "pct_in_range": in_range,
        })

    # training effect: averaged over participants, the last session should sit below the first
    session_means = {}
    for col in wide.columns:
        p, s = parse_session_name(col)
        session_means.setdefault(s, []).append(float(wide[col].mean()))
    if len(session_means) >= 2:
        first, last = min(session_means), max(session_means)
        m_first = float(np.mean(session_means[first]))
        m_last = float(np.mean(session_means[last]))
        add_check("Training effect direction", m_last < m_first, {
            "first_session": int(first),
            "last_session": int(last),
            "mean_hr_first": m_first,
            "mean_hr_last": m_last,
        })

    if "resting_hr" in participants.columns and "submax_hr" in participants.columns:
        ordered = (participants["resting_hr"] < participants["submax_hr"]).mean()
        add_check("Resting below submax", ordered == 1.0, {"pct_ordered": float(ordered)})

    report["summary"]["ok"] = bool(all(c["ok"] for c in report["checks"]))
    return report
