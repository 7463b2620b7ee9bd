from __future__ import annotations

import importlib
from pathlib import Path

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .logging import configure_logging
from .matrix.controller import register as register_matrix
from .projects.controller import register as register_projects


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger = structlog.get_logger("org_talent")
    logger.info(
        "app.settings_loaded",
        settings=settings_module,
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(getattr(settings, "SCHEMA_PATH"))
        apply_schema(db_config, schema_path=schema_path)
        logger.info("app.schema_ready", tables=len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        max_cascade_roster=int(getattr(settings, "MAX_CASCADE_ROSTER")),
        roster_batch_size=int(getattr(settings, "ROSTER_BATCH_SIZE")),
        potential_criteria=getattr(settings, "POTENTIAL_CRITERIA", None),
    )

    register_projects(app, container)
    register_employees(app, container)
    register_matrix(app, container)

    return app
