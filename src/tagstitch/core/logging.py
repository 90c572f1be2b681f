import logging
import os
import sys
from typing import Any, Literal

import structlog

LogFormat = Literal["json", "plain", "auto"]


def _should_use_json_format() -> bool:
    """Determine if JSON format should be used based on environment."""
    # Check if running in CI
    ci_vars = ["CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL"]
    if any(os.environ.get(var) for var in ci_vars):
        return True

    # Expanded text goes to stdout, so log lines go to stderr
    return bool(not sys.stderr.isatty())


def setup_logging(format_type: LogFormat = "auto", level: str = "INFO") -> None:
    """
    Setup structured logging with format control.

    Log lines are written to stderr so that expanded or stitched text on
    stdout stays clean for piping.

    Args:
        format_type: "json" for JSON output, "plain" for human-readable,
                "auto" to auto-detect based on TTY/CI.
        level: Minimum level name that is emitted.
    """
    use_json = format_type == "json" or (format_type == "auto" and _should_use_json_format())

    if use_json:
        processors: list[Any] = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # CLI runs may swap sys.stderr between invocations
        cache_logger_on_first_use=False,
    )


def configure_library_default() -> None:
    """Quiet defaults for library use when the host application set nothing up.

    Only warnings and errors are emitted, on stderr. An existing structlog
    configuration is left alone.
    """
    if not structlog.is_configured():
        setup_logging("plain", level="WARNING")


configure_library_default()

log = structlog.get_logger()
