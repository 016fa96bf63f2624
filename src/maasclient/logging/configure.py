# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from datetime import datetime, timezone
import logging
import sys

from pythonjsonlogger import jsonlogger
import structlog
from structlog.contextvars import merge_contextvars


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record: logging.LogRecord, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["logger"] = f"{record.name}:{record.lineno}"
        log_record["level"] = record.levelname
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


HANDLER_NAME = "maasclient"

# Library events are dropped until the application configures logging.
logging.getLogger("maasclient").addHandler(logging.NullHandler())


def get_logger(name):
    """Return a structlog logger writing through the stdlib logger `name`.

    Until the application configures logging, events go wherever the
    standard library sends them, which for the `maasclient` loggers is
    nowhere.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(level=logging.INFO, stream=sys.stdout):
    """Send structlog and standard library logs to `stream` as JSON.

    The client itself never configures logging; applications (and the
    `maas-client` command) call this at start-up.  Calling it again replaces
    the handler installed by the previous call.  The HTTP libraries are kept
    at WARNING unless `level` is DEBUG.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            # "event" becomes "msg" and the rest is passed as "extra", which
            # the JSON formatter renders as fields.
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream=stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(CustomJsonFormatter())
    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    library_level = logging.WARNING if level > logging.DEBUG else level
    for name in ("urllib3", "aiohttp", "oauthlib"):
        logging.getLogger(name).setLevel(library_level)
    return handler
