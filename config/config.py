import os
from pathlib import Path

# Shared settings: every environment reads the same variables.
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "org_talent_db"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Role cascade bounds
MAX_CASCADE_ROSTER = int(os.getenv("MAX_CASCADE_ROSTER", "5000"))
ROSTER_BATCH_SIZE = int(os.getenv("ROSTER_BATCH_SIZE", "500"))

# Comma-separated criterion ids; empty keeps the built-in defaults.
_criteria = [c.strip() for c in os.getenv("POTENTIAL_CRITERIA", "").split(",") if c.strip()]
POTENTIAL_CRITERIA = tuple(_criteria) or None

# schema.sql applied by AUTO_INIT_DB and scripts/init_db.py.
SCHEMA_PATH = os.getenv("SCHEMA_PATH", str(Path(__file__).resolve().parents[1] / "database" / "schema.sql"))
