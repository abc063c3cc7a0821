import logging

import structlog
from structlog.stdlib import add_log_level, add_logger_name

LOG_FORMATS = ("console", "plain", "json")


def resolve_level(level: int | str) -> int:
    """Accept ``logging.INFO`` or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'.")
    return resolved


def build_renderer(log_format: str = "console"):
    """Final structlog processor for ``log_format``.

    ``console`` is the coloured developer output, ``plain`` the same without
    colour codes (CI and redirected data-generation runs), ``json`` one object
    per line.
    """
    log_format = log_format.lower()
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=True)
    if log_format == "plain":
        return structlog.dev.ConsoleRenderer(colors=False)
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    raise ValueError(f"Unknown log format '{log_format}', expected one of {LOG_FORMATS}.")


def setup_logging(level: int | str = logging.INFO, log_format: str = "console") -> None:
    """Configure structlog and standard logging for a data-generation run."""
    level = resolve_level(level)
    processors = [
        structlog.contextvars.merge_contextvars,
        add_logger_name,
        add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
    ]
    if log_format.lower() == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(build_renderer(log_format))

    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
