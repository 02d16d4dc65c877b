"""structlog configuration for tourney.

All records, including stdlib ``logging`` calls from library modules and
SQLAlchemy, are routed through one structlog ``ProcessorFormatter`` on
stderr. Output is either a console rendering or JSON lines (--log-json).
"""

from __future__ import annotations

import logging
import sys

import structlog

_QUIET_LOGGERS = ("sqlalchemy", "sqlalchemy.engine")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    echo_sql: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: DEBUG for the ``tourney`` logger tree, else WARNING.
        log_json: Render JSON lines instead of console output.
        echo_sql: Let SQLAlchemy statement logging through at INFO.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("tourney").setLevel(logging.DEBUG if verbose else logging.WARNING)

    sql_level = logging.INFO if echo_sql else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)
