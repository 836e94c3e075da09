import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from showroom.config import load_config
from showroom.db import connect, init_db
from showroom.uploads.storage import ensure_dirs


def main() -> None:
    cfg = load_config()
    with connect(cfg.MONGODB_URI, cfg.MONGODB_DB) as db:
        init_db(db)
    ensure_dirs(cfg.UPLOAD_DIR)

    print(f"DB initialized: {cfg.MONGODB_URI} / {cfg.MONGODB_DB}")


if __name__ == "__main__":
    main()
