"""Recompute every Brand.carCount from the cars collection.

Repairs drift left behind by interrupted car writes.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from showroom.config import load_config
from showroom.db import connect
from showroom.catalog.integrity import recompute_all


def main() -> None:
    cfg = load_config()
    with connect(cfg.MONGODB_URI, cfg.MONGODB_DB) as db:
        n = recompute_all(db)
    print(f"Recomputed carCount for {n} brands")


if __name__ == "__main__":
    main()
