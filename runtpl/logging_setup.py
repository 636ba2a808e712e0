import logging
import sys
import structlog

from runtpl.config.settings import LogLevel

_LOGGER_NAME = "runtpl"

class _CurrentStderrHandler(logging.StreamHandler):
    # writes to whatever sys.stderr is at emit time, so swapped streams are honoured.
    def __init__(self):
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass

def level_for_verbosity(verbosity: int, configured: LogLevel = LogLevel.WARNING) -> LogLevel:
    # -v / -vv on the command line take precedence over the configured level.
    if verbosity >= 2:
        return LogLevel.DEBUG
    if verbosity == 1:
        return LogLevel.INFO
    return configured

def configure_logging(level: LogLevel = LogLevel.WARNING):
    # routes structlog events through the stdlib "runtpl" logger to stderr.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _CurrentStderrHandler()
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        foreign_pre_chain=[structlog.stdlib.add_log_level],
    ))

    app_logger = logging.getLogger(_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(getattr(logging, level.value.upper()))
    app_logger.propagate = False

    structlog.get_logger(__name__).debug("logging_configured", level=level.value)
