from __future__ import annotations
import json, logging, platform, datetime, sys
from pathlib import Path
from typing import Optional
import numpy as np
import pandas as pd

from .config import GeneratorConfig
from .participants import generate_participants
from .sessions import generate_session_series
from .sanity import run_sanity_checks
from .io import session_label, write_dataset, SECONDS_COL
from .store import FileStore
from .utils import sha256_file

logger = logging.getLogger(__name__)


def generate_wide_table(cfg: GeneratorConfig, rng: np.random.Generator) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Build every session series in memory.

    Returns (participants, wide) where ``wide`` has one ``P<p>_S<s>`` column per
    session and is indexed by elapsed seconds.
    """
    participants = generate_participants(cfg, rng)

    columns = {}
    for row in participants.itertuples(index=False):
        for session in range(1, cfg.n_sessions + 1):
            columns[session_label(row.participant_id, session)] = generate_session_series(
                row.resting_hr, row.submax_hr, session, cfg, rng
            )
        logger.debug("Participant %d: %d sessions generated", row.participant_id, cfg.n_sessions)

    wide = pd.DataFrame(columns, index=pd.RangeIndex(cfg.duration_seconds, name=SECONDS_COL))
    return participants, wide


def generate_dataset(cfg: GeneratorConfig, out_dir: str, store: Optional[FileStore] = None,
                     project: Optional[str] = None, run_checks: bool = True) -> dict:
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    rng = np.random.default_rng(cfg.seed)
    participants, wide = generate_wide_table(cfg, rng)
    logger.info("Generated %d participants x %d sessions (%d s each)",
                cfg.n_participants, cfg.n_sessions, cfg.duration_seconds)

    sessions_dir = out_path / "sessions"
    written = write_dataset(wide, sessions_dir)
    participants_path = out_path / "participants.csv"
    participants.to_csv(participants_path, index=False)

    meta = {
        "generated_at_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds"),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "config": cfg.to_dict(),
        "counts": {
            "n_participants": int(participants.shape[0]),
            "n_sessions": int(wide.shape[1]),
            "samples_per_session": int(wide.shape[0]),
        },
        "files": {},
    }

    for name, path in {**written, participants_path.name: str(participants_path)}.items():
        meta["files"][name] = {
            "path": str(path),
            "sha256": sha256_file(Path(path)),
        }

    meta_path = out_path / "metadata.json"
    with open(meta_path, "w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    result = {"metadata_path": str(meta_path), "outputs": written}

    if run_checks:
        report = run_sanity_checks(wide, participants, cfg)
        report_path = out_path / "sanity_report.json"
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        if not report["summary"]["ok"]:
            failed = [c["name"] for c in report["checks"] if not c["ok"]]
            logger.warning("Sanity checks failed: %s", ", ".join(failed))
        result["sanity_report_path"] = str(report_path)

    if store is not None:
        if not project:
            raise ValueError("A project is required when uploading to a store.")
        uploaded = []
        for name in sorted(written):
            uploaded.append(store.upload(project, Path(written[name])).name)
        logger.info("Uploaded %d files to project %s", len(uploaded), project)
        result["uploaded"] = uploaded

    return result
