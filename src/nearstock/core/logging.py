"""
Logging configuration.

The packaged `config/logging.yaml` sets up a console handler and a `nearstock`
logger; the level of that logger comes from settings (`NEARSTOCK_LOG_LEVEL`).
Startup also reports warehouse registry problems, since they never fail a request
and would otherwise only show up as unexpected fallback answers.
"""

from __future__ import annotations

import copy
import logging.config

from nearstock.config.settings import Settings, get_logging_config, get_settings

APP_LOGGER = "nearstock"


def configure_logging(settings: Settings | None = None) -> list[str]:
    """Apply the logging config and return any warehouse configuration problems (also logged)."""
    settings = settings or get_settings()
    config = copy.deepcopy(get_logging_config())
    config.setdefault("loggers", {}).setdefault(APP_LOGGER, {})["level"] = settings.app.log_level.upper()
    logging.config.dictConfig(config)

    problems = settings.warehouses.consistency_problems()
    logger = logging.getLogger(APP_LOGGER)
    for problem in problems:
        logger.warning("Warehouse configuration: %s", problem)
    return problems
