import os

from .config import DB_CONFIG, LOG_LEVEL, MAX_CASCADE_ROSTER, POTENTIAL_CRITERIA, ROSTER_BATCH_SIZE, SCHEMA_PATH  # noqa: F401

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
