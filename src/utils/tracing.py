"""Tracing for recipe workflow runs.

Agno's OpenTelemetry tracing records every agent run into its own SQLite
database. Both stages of a workflow run call their agents with the run id as
`session_id`, so the traces of one run (ingredient analysis, then recipe
crafting) share a session and can be read back together with the run id from
the workflow log records.
"""

import os
from typing import Optional

from agno.db.sqlite import SqliteDb
from agno.tracing import setup_tracing

from src.utils.config import config
from src.utils.logger import logger

TRACING_DB_ID = "recipe_workflow_tracing_db"


def initialize_tracing() -> Optional[SqliteDb]:
    """Start exporting agent traces to the tracing database.

    Kept apart from the agent memory database so stateless runs can still be traced.

    Returns:
        SqliteDb the traces are written to, or None when tracing is disabled or
        cannot start (failures are logged as warnings, never raised).
    """
    if not config.ENABLE_TRACING:
        logger.info("Tracing disabled via ENABLE_TRACING=false")
        return None

    db_dir = os.path.dirname(config.TRACING_DB_FILE)
    try:
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        tracing_db = SqliteDb(db_file=config.TRACING_DB_FILE, id=TRACING_DB_ID)

        setup_tracing(
            db=tracing_db,
            batch_processing=True,
            max_queue_size=1024,
            schedule_delay_millis=3000,
            max_export_batch_size=128,
        )
    except ImportError as e:
        logger.warning(
            f"OpenTelemetry packages not installed (optional): {e}. "
            "Install with: pip install 'recipe-workflow[tracing]'"
        )
        return None
    except Exception as e:
        logger.warning(f"Tracing initialization failed (non-fatal): {e}")
        return None

    logger.info(f"Tracing enabled: {config.TRACING_DB_FILE} (traces grouped by workflow run id)")
    return tracing_db
