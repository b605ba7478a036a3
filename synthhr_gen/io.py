from __future__ import annotations
import re
from pathlib import Path
from typing import IO, Union
import numpy as np
import pandas as pd
from .errors import LengthMismatch

HR_COL = "heart_rate"
SECONDS_COL = "elapsed_seconds"

_SESSION_RE = re.compile(r"^P(\d+)_S(\d+)$")

def session_label(participant: int, session: int) -> str:
    return f"P{int(participant)}_S{int(session)}"

def session_filename(participant: int, session: int) -> str:
    return session_label(participant, session) + ".csv"

def parse_session_name(name: str) -> tuple[int, int]:
    """``P3_S10.csv`` / ``P3_S10`` -> (3, 10)."""
    stem = Path(name).name
    if stem.lower().endswith(".csv"):
        stem = stem[:-4]
    m = _SESSION_RE.match(stem)
    if m is None:
        raise ValueError(f"Not a session file name (expected P<participant>_S<session>.csv): {name!r}")
    return int(m.group(1)), int(m.group(2))

def write_session_csv(series: np.ndarray, path: Path):
    # unnamed 0-based row index + heart_rate, one header row
    s = pd.Series(np.asarray(series, dtype=float), name=HR_COL)
    s.to_csv(path, index=True)

def read_session_csv(src: Union[str, Path, IO]) -> pd.Series:
    """Read one session file into a ``heart_rate`` Series indexed by elapsed seconds.

    Files written with the session label as the value column header (the older
    layout, e.g. R ``write.csv``) are accepted too; their 1-based row names
    are shifted to 0-based seconds.
    """
    df = pd.read_csv(src, index_col=0, float_precision="round_trip")
    if HR_COL in df.columns:
        s = df[HR_COL]
    elif df.shape[1] == 1:
        s = df.iloc[:, 0]
    else:
        raise ValueError(f"Expected a single '{HR_COL}' column, got {list(df.columns)}")
    s = pd.to_numeric(s, errors="coerce").astype(float)
    s.index = s.index.astype(int)
    if not s.index.is_unique:
        dupes = sorted(set(s.index[s.index.duplicated()]))[:5]
        raise LengthMismatch(f"Duplicate row index in session file, e.g. seconds {dupes}")
    if _SESSION_RE.match(str(df.columns[0])) and len(s) and s.index.min() == 1:
        s.index = s.index - 1
    s.index.name = SECONDS_COL
    s.name = HR_COL
    return s

def write_dataset(wide: pd.DataFrame, out_dir: Path) -> dict:
    """One CSV per wide-table column; returns {file name: path}."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = {}
    for col in wide.columns:
        p, s = parse_session_name(col)
        path = out_dir / session_filename(p, s)
        write_session_csv(wide[col].to_numpy(), path)
        written[path.name] = str(path)
    return written
