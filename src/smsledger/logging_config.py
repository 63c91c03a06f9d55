"""structlog setup shared by the library and the CLI."""

import logging
import sys

import structlog


def _processors(renderer) -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def _configure_structlog(renderer) -> None:
    structlog.configure(
        processors=_processors(renderer),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Library default: route through stdlib logging, so nothing is emitted
# until the application configures handlers and levels
_configure_structlog(structlog.processors.JSONRenderer())


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structlog on top of the standard library logger.

    Log lines go to stderr so CLI output on stdout stays parseable.

    Args:
        level: Logging level name (e.g. "INFO")
        json_output: Render JSON lines instead of the console format
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    _configure_structlog(renderer)
