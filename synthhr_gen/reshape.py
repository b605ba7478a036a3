from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import Optional
import numpy as np
import pandas as pd

from .errors import LengthMismatch
from .io import HR_COL, SECONDS_COL, parse_session_name, read_session_csv, session_label
from .store import FileStore

logger = logging.getLogger(__name__)

LONG_COLUMNS = ["participant", "session", SECONDS_COL, HR_COL]


def collect_dataset(store: FileStore, project: str, staging_dir: Optional[str] = None) -> pd.DataFrame:
    """Fetch every session file in ``project`` and bind them column-wise.

    Sessions of unequal length are aligned on elapsed seconds; the shorter
    ones are NaN-padded and caught later by ``validate_long``.
    """
    stage = Path(staging_dir) if staging_dir else None
    if stage is not None:
        stage.mkdir(parents=True, exist_ok=True)

    columns = {}
    for f in store.list_files(project):
        try:
            p, s = parse_session_name(f.name)
        except ValueError:
            logger.warning("Skipping non-session file %s", f.name)
            continue
        raw = store.download(f)
        if stage is not None:
            (stage / f.name).write_bytes(raw)
        columns[session_label(p, s)] = read_session_csv(io.BytesIO(raw))

    if not columns:
        raise LengthMismatch(f"No session files found in project {project!r}")
    logger.info("Collected %d session files from %s", len(columns), project)

    wide = pd.concat(columns, axis=1, join="outer").sort_index()
    wide.index.name = SECONDS_COL
    return wide


def to_long(wide: pd.DataFrame) -> pd.DataFrame:
    """Wide ``P<p>_S<s>`` table -> one row per participant, session and second.

    Raises ``LengthMismatch`` for a column with no samples at all, which would
    otherwise vanish from the long table without a trace.
    """
    long = (
        wide.rename_axis(SECONDS_COL)
        .reset_index()
        .melt(id_vars=SECONDS_COL, var_name="label", value_name=HR_COL)
        .dropna(subset=[HR_COL])
    )
    empty = sorted(set(wide.columns) - set(long["label"]))
    if empty:
        raise LengthMismatch(f"{len(empty)} session(s) have 0 samples: {', '.join(empty)}")
    ids = np.array([parse_session_name(x) for x in long["label"]], dtype=int).reshape(-1, 2)
    long["participant"] = ids[:, 0]
    long["session"] = ids[:, 1]
    long[SECONDS_COL] = long[SECONDS_COL].astype(int)
    long = long[LONG_COLUMNS].sort_values(["participant", "session", SECONDS_COL]).reset_index(drop=True)
    return long


def validate_long(long: pd.DataFrame, expected_length: int) -> pd.DataFrame:
    """Raise ``LengthMismatch`` unless every session covers exactly 0..expected_length-1."""
    if long.empty:
        raise LengthMismatch("Long table is empty")

    g = long.groupby(["participant", "session"])[SECONDS_COL].agg(["size", "nunique", "min", "max"])
    bad = g[
        (g["size"] != expected_length)
        | (g["nunique"] != expected_length)
        | (g["min"] != 0)
        | (g["max"] != expected_length - 1)
    ]
    if len(bad):
        first = bad.iloc[0]
        p, s = bad.index[0]
        raise LengthMismatch(
            f"{len(bad)} session(s) do not span 0..{expected_length - 1}; "
            f"e.g. {session_label(p, s)} has {int(first['size'])} samples "
            f"(seconds {int(first['min'])}..{int(first['max'])})"
        )

    max_seconds = int(long[SECONDS_COL].max())
    if max_seconds != expected_length - 1:
        raise LengthMismatch(f"max({SECONDS_COL}) = {max_seconds}, expected {expected_length - 1}")
    return long
