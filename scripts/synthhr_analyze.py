#!/usr/bin/env python3
"""CLI: collect a generated heart-rate study from the file store and summarise it.

Examples:
  python synthhr_analyze.py --out ./analysis --store local --store-root ./store --project study
  python synthhr_analyze.py --out ./analysis --store osf --project rs8kz --staging ./downloads
"""
from __future__ import annotations
import argparse
import logging
import sys
from synthhr_gen.analysis import analyze_dataset
from synthhr_gen.config import AnalysisConfig, StoreConfig
from synthhr_gen.errors import DivisibilityError, LengthMismatch, RemoteIOError
from synthhr_gen.store import build_store

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--out", required=True, help="Output directory")
    p.add_argument("--config", default=None, help="Optional analysis config JSON")
    p.add_argument("--store", default=None, choices=["local", "osf"])
    p.add_argument("--store-root", default=None, help="Root directory for --store local")
    p.add_argument("--project", default=None, help="OSF node id, or local project directory")
    p.add_argument("--store-config", default=None, help="Optional store config JSON")
    p.add_argument("--staging", default=None, help="Keep a local copy of every downloaded file here")
    p.add_argument("--stage-width", type=int, default=None, help="Stage width in seconds")
    p.add_argument("--no-plots", action="store_true", help="Skip figures")
    return p.parse_args()

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args()
    cfg = AnalysisConfig()
    if args.config:
        cfg = AnalysisConfig.from_json(args.config)
    if args.stage_width is not None:
        cfg.stage_width = args.stage_width
    if args.no_plots:
        cfg.make_plots = False

    store_cfg = StoreConfig.from_json(args.store_config) if args.store_config else StoreConfig()
    for key, val in {"kind": args.store, "root": args.store_root, "project": args.project}.items():
        if val is not None:
            setattr(store_cfg, key, val)

    try:
        res = analyze_dataset(cfg, build_store(store_cfg), store_cfg.project,
                              out_dir=args.out, staging_dir=args.staging)
    except (LengthMismatch, DivisibilityError, RemoteIOError) as e:
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)

    print("✅ Done.")
    print(res["summary"].to_string(index=False))
    for k, v in res["outputs"].items():
        print(f"{k}: {v}")

if __name__ == "__main__":
    main()
