"""
Centralized logging for formatwith using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

Features:
- A custom `LOG` function for library debug logging.
- Dynamic checking of the `beQuiet` flag to suppress logs when necessary.
- Consistent and customizable logging format.

The package's log records are disabled on import and the handlers of the
embedding program are left alone. The `fmtwith` command turns them on with
`logging_enable`; a host program can do the same or call
`logger.enable("formatwith")` and route them to its own sinks.

Example:
    from formatwith.lib.log import LOG
    LOG("Missing key substituted with empty text.")

Environment:
- Set `FMTW_BEQUIET=True` to suppress detailed logging output.
"""

from loguru import logger
from typing import Any, TextIO
import sys

PACKAGE: str = "formatwith"

# Create a distinct logger instance for the library
app_logger = logger.bind(app="FORMATWITH")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >32}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.disable(PACKAGE)


def logging_enable(sink: TextIO = sys.stderr) -> int:
    """
    Turn on the package's log records and send them to a sink.

    Only records bound by `app_logger` reach the sink, so handlers added by
    an embedding program are neither removed nor duplicated into.

    :param sink: Where to write, stderr by default.
    :return: The handler id, for `logger.remove`.
    """
    logger.enable(PACKAGE)
    return logger.add(
        sink,
        format=logger_format,
        filter=lambda record: record["extra"].get("app") == "FORMATWITH",
    )


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Library logging function.

    Checks the `beQuiet` flag in `appsettings` and logs the message
    only if logging is enabled.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from formatwith.config.settings import appsettings

        if not appsettings.beQuiet:
            app_logger.debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")
