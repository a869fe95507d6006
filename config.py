# config.py
# -----------------------------------------------
# Runtime configuration read from the environment.
#   DATA_DIR              directory holding the SQLite file
#   DATABASE_URL          full SQLAlchemy URL (overrides DATA_DIR)
#   TIP_LEDGER_LOG_LEVEL  DEBUG / INFO / WARNING ...
# -----------------------------------------------
from __future__ import annotations

import os
from pathlib import Path

from domain import Role

# Wage per hour by role, captured on each shift when it is logged
SERVER_WAGE = 3.00
HOST_WAGE = 11.50
WAGE_RATES = {Role.SERVER: SERVER_WAGE, Role.HOST: HOST_WAGE}

DB_FILENAME = "tips.db"


def pick_data_dir() -> Path:
    """First writable candidate among $DATA_DIR, /data and ./data."""
    candidates = []
    env = os.getenv("DATA_DIR")
    if env:
        candidates.append(Path(env))
    candidates += [Path("/data"), Path.cwd() / "data"]

    for p in candidates:
        try:
            p.mkdir(parents=True, exist_ok=True)
            t = p / ".rwtest"
            t.write_text("ok")
            t.unlink(missing_ok=True)
            return p
        except OSError:
            continue
    return Path.cwd()


def database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return f"sqlite:///{(pick_data_dir() / DB_FILENAME).as_posix()}"


def log_level() -> str:
    return os.getenv("TIP_LEDGER_LOG_LEVEL", "INFO").upper()
