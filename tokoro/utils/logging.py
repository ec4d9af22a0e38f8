"""Structured logging setup using structlog.

Every event goes through one processor chain and ends in a single
renderer: JSON when the app runs with ``APP_ENV=production``, a coloured
console view anywhere else.  Each event carries ``service="tokoro"`` so the
JSON lines can be told apart once shipped to a shared log store.

Standard-library records (uvicorn, pymongo, httpx) are routed through the
same chain.  The chatty ones are held at WARNING: the driver's heartbeats
say nothing useful, and uvicorn's access log repeats the ``http_request``
event emitted by ``RequestLoggingMiddleware``.
"""

import logging
import sys
from collections.abc import Iterable

import structlog

SERVICE_NAME = "tokoro"

QUIET_LOGGERS: tuple[str, ...] = ("pymongo", "uvicorn.access", "httpx")


def _add_service(
    _logger: object, _method: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer(use_json: bool) -> structlog.types.Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _route_stdlib(
    processors: list[structlog.types.Processor],
    renderer: structlog.types.Processor,
    level: str,
    quiet: Iterable[str],
) -> None:
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *processors,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    floor = max(logging.WARNING, root_logger.level)
    for name in quiet:
        logging.getLogger(name).setLevel(floor)


def configure_logging(
    log_level: str = "INFO",
    app_env: str = "development",
    *,
    json_output: bool = False,
    quiet_loggers: Iterable[str] = QUIET_LOGGERS,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib bridge.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
        app_env: Deployment environment; ``"production"`` selects JSON.
        json_output: Force JSON regardless of ``app_env``.
        quiet_loggers: Stdlib loggers held at WARNING or above.

    Returns:
        A configured structlog BoundLogger.
    """
    level = log_level.upper()
    use_json = json_output or app_env == "production"
    processors = _shared_processors()
    renderer = _select_renderer(use_json)

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _route_stdlib(processors, renderer, level, quiet_loggers)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound with *name*, configuring defaults first if needed."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
