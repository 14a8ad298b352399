"""
Logging
-------

This module's purpose is to ensure that TODOAPP modules
end up instantiating loggers which all share a common
formatter and handler.

It attempts to be the first thing to get a handler, and thereby be able to
set the basic config.  It also instantiates a logger at the top of the
hierarchy, one named simply `todoapp`, so that all further TODOAPP loggers
(using the recommended pattern) will be under that parent logger and inherit
its config.

This module must not import :mod:`todoapp.config`, since the config module
logs while it loads.  Settings from the config file are applied later, by
calling :func:`configure_logging`.

"""
import logging
from logging.handlers import SysLogHandler
from typing import Union

DEFAULT_LEVEL = logging.INFO
"""Default minimum severity `INFO`"""

DEFAULT_FACILITY = SysLogHandler.LOG_LOCAL0
"""Default **syslog** facility `LOCAL0`"""


class LogSetup:
    """Establish global log format and handlers for TODOAPP

    Two formatters are defined, one for debugging and one for general use.
    By default, messages go to the console (`stderr`), which is where
    uvicorn sends its own logs.  A **syslog** handler is available as well,
    and is attached by :func:`configure_logging` when the config asks for it.

    """

    debug_formatter = logging.Formatter(
        "TODOAPP:%(levelname)s %(filename)s@%(lineno)s: %(message)s"
    )
    """A formatter helpful for debugging."""

    default_formatter = logging.Formatter(
        "%(asctime)s TODOAPP:%(levelname)s %(name)s: %(message)s"
    )
    """The default formatter"""

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(default_formatter)

    def __init__(self):
        """Setup logging

        If there are not yet any handlers, this routine calls
        :py:func:`logging.basicConfig` to set up basic logging configuration.

        If there are already handlers, for instance due to running within
        :mod:`pytest`, then nothing happens.

        """
        if not logging.getLogger(None).hasHandlers():
            logging.basicConfig(handlers=[self.console_handler])

    @classmethod
    def syslog_handler(cls, address: str = "/dev/log") -> SysLogHandler:
        """Build a handler which sends messages to **syslog**"""
        handler = SysLogHandler(facility=DEFAULT_FACILITY, address=address)
        handler.setFormatter(
            logging.Formatter("TODOAPP:%(levelname)s %(message)s")
        )
        return handler


def configure_logging(
    level: Union[int, str] = DEFAULT_LEVEL, syslog: bool = False
) -> logging.Logger:
    """Apply configured settings to the `todoapp` logger

    :param level: a level name such as ``"DEBUG"``, or a numeric level
    :param syslog: if true, also send messages to **syslog**

    Returns the top-level `todoapp` logger.

    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = DEFAULT_LEVEL
    logger.setLevel(level)
    if syslog and not any(
        isinstance(h, SysLogHandler) for h in logger.handlers
    ):
        logger.addHandler(LogSetup.syslog_handler())
    return logger


LogSetup()
logger = logging.getLogger("todoapp")
"""Create a logger in order to configure the top of the hierarchy"""
# without this, the library may not emit logs from a script
logger.setLevel(DEFAULT_LEVEL)
