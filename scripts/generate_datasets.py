#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path

from scc_dagsp.config import configure_logging
from scc_dagsp.dataset import generate_suite, load_dataset


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate the small/medium/large benchmark datasets.")
    ap.add_argument("--data-dir", default="data", help="Directory to write <name>.json files into.")
    ap.add_argument("--seed", type=int, default=42, help="Seed for numpy.random.default_rng.")
    ap.add_argument("--log-level", default="WARNING", help="Logging level.")
    args = ap.parse_args()

    configure_logging(args.log_level)

    for path in generate_suite(Path(args.data_dir), seed=args.seed):
        ds = load_dataset(path)
        print(f"Wrote {path} (n={ds.n}, edges={len(ds.edges)})")


if __name__ == "__main__":
    main()
