"""Create a user in the showroom database.

Usage:
  python scripts/create_user.py --email alice@example.com --password '...' --name Alice --role user

NOTE: This is intended for local/dev.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from showroom.config import load_config
from showroom.db import connect, init_db
from showroom.auth.crud import create_user


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--name", default="")
    ap.add_argument("--role", choices=["user", "admin"], default="user")
    args = ap.parse_args()

    cfg = load_config()
    with connect(cfg.MONGODB_URI, cfg.MONGODB_DB) as db:
        init_db(db)
        try:
            u = create_user(db, name=args.name, email=args.email, password=args.password, role=args.role)
        except ValueError as e:
            print(f"Could not create user: {e}")
            sys.exit(1)

    print("Created user:")
    print(u)


if __name__ == "__main__":
    main()
