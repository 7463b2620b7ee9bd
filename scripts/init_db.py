from __future__ import annotations

import importlib
import sys
from pathlib import Path

import structlog

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.org_talent.org_talent.database.bootstrap import apply_schema, list_tables
from src.org_talent.org_talent.logging import configure_logging


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger = structlog.get_logger("org_talent.init_db")
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(settings.SCHEMA_PATH)
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    logger.info(
        "schema.applied",
        target=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        tables=sorted(tables),
    )


if __name__ == "__main__":
    main()
