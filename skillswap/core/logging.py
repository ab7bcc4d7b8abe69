"""
Structured logging for the SkillSwap API, built on structlog.

Every record, whether it comes from a module-level ``logging.getLogger``
logger, uvicorn or SQLAlchemy, goes through one stdlib handler whose
formatter runs the structlog processor chain. Development renders to the
console; every other environment emits one JSON object per line carrying
the ``service`` name and the request-scoped ``request_id`` bound by
RequestIdMiddleware (skillswap.api.middleware).

Usage:
    from skillswap.core.logging import configure_logging
    configure_logging(settings.app_env, settings.log_level, settings.echo_sql)
"""

import logging
import sys

import structlog

SERVICE_NAME = "skillswap"

# Per-request access lines duplicate the request_id-tagged application logs
_ACCESS_LOGGERS = ("uvicorn.access",)


def _add_service(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def resolve_level(log_level: str) -> int:
    """Turn a level name such as ``"debug"`` or ``"WARNING"`` into its number."""
    level = logging.getLevelName(log_level.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    return level


def configure_logging(app_env: str = "dev", log_level: str = "INFO", echo_sql: bool = False) -> None:
    """
    Install the structlog bridge on the root logger.

    Args:
        app_env: "dev" renders colored console output, anything else JSON
        log_level: Root level name (LOG_LEVEL)
        echo_sql: Keep SQLAlchemy statement logging at INFO; otherwise it is
            raised to WARNING so echoed SQL does not flood the output
    """
    level = resolve_level(log_level)
    dev = app_env == "dev"

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_service,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=not dev),
        structlog.processors.StackInfoRenderer(),
    ]
    if not dev:
        # ConsoleRenderer prints tracebacks itself
        shared_processors.append(structlog.processors.format_exc_info)

    renderer = structlog.dev.ConsoleRenderer() if dev else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if echo_sql else logging.WARNING)
    if not dev:
        for name in _ACCESS_LOGGERS:
            logging.getLogger(name).setLevel(max(level, logging.WARNING))
