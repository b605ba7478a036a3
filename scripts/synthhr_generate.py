#!/usr/bin/env python3
"""CLI: synthetic training-study heart-rate generator.

Examples:
  python synthhr_generate.py --out ./out --n-participants 10 --n-sessions 10 --seed 20211009
  python synthhr_generate.py --out ./out --config ./config.json --upload --store local --project study
  OSF_TOKEN=... python synthhr_generate.py --out ./out --upload --store osf --project abc12
"""
from __future__ import annotations
import argparse
import logging
from synthhr_gen.config import GeneratorConfig, StoreConfig
from synthhr_gen.pipeline import generate_dataset
from synthhr_gen.store import build_store

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--out", required=True, help="Output directory")
    p.add_argument("--config", default=None, help="Optional config JSON (overrides defaults)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--n-participants", type=int, default=None)
    p.add_argument("--n-sessions", type=int, default=None)
    p.add_argument("--no-checks", action="store_true", help="Skip sanity checks")
    p.add_argument("--upload", action="store_true", help="Push session files to the file store")
    p.add_argument("--store", default=None, choices=["local", "osf"])
    p.add_argument("--store-root", default=None, help="Root directory for --store local")
    p.add_argument("--project", default=None, help="OSF node id, or local project directory")
    p.add_argument("--store-config", default=None, help="Optional store config JSON")
    return p.parse_args()

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args()
    cfg = GeneratorConfig()
    if args.config:
        cfg = GeneratorConfig.from_json(args.config)

    # apply CLI overrides
    for key, val in {
        "seed": args.seed,
        "n_participants": args.n_participants,
        "n_sessions": args.n_sessions,
    }.items():
        if val is not None:
            setattr(cfg, key, val)

    store = None
    store_cfg = StoreConfig.from_json(args.store_config) if args.store_config else StoreConfig()
    for key, val in {"kind": args.store, "root": args.store_root, "project": args.project}.items():
        if val is not None:
            setattr(store_cfg, key, val)
    if args.upload:
        store = build_store(store_cfg)

    res = generate_dataset(cfg, out_dir=args.out, store=store, project=store_cfg.project,
                           run_checks=not args.no_checks)
    print("✅ Done.")
    print(f"metadata.json: {res['metadata_path']}")
    print(f"session files: {len(res['outputs'])}")
    if "sanity_report_path" in res:
        print(f"sanity report: {res['sanity_report_path']}")
    if "uploaded" in res:
        print(f"uploaded {len(res['uploaded'])} files to {store_cfg.kind}:{store_cfg.project}")

if __name__ == "__main__":
    main()
