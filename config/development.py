import os

from .config import DB_CONFIG, LOG_LEVEL, MAX_CASCADE_ROSTER, POTENTIAL_CRITERIA, ROSTER_BATCH_SIZE, SCHEMA_PATH  # noqa: F401

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
