from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from .common.logging_utils import setup_logging
from .container import Container, build_container
from .core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, ensure_motives, list_tables

logger = logging.getLogger("timeclock.main")


def create_container() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")

    setup_logging(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )

    logger.info(
        "settings loaded",
        extra={
            "settings": settings_module,
            "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        },
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        ensure_motives(db_config)
        logger.info("schema ready", extra={"tables": len(list_tables(db_config))})

    return build_container(
        db_config=db_config,
        timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        history_limit=int(getattr(settings, "HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)),
    )
