"""Create the permanent admin account (ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME).

Idempotent: does nothing if an admin with that email already exists.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from showroom.config import load_config
from showroom.db import connect, init_db
from showroom.auth.crud import bootstrap_admin_if_needed


def main() -> None:
    cfg = load_config()
    with connect(cfg.MONGODB_URI, cfg.MONGODB_DB) as db:
        init_db(db)
        u = bootstrap_admin_if_needed(db, cfg)

    if u is None:
        print(f"Admin account already exists (or is disabled): {cfg.ADMIN_EMAIL}")
        return
    print("Admin account created:")
    print(f"  Email: {u['email']}")
    print(f"  Name:  {u['name']}")


if __name__ == "__main__":
    main()
