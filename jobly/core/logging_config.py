"""
Root logger setup for the Jobly API.

JSON lines in deployed environments, plain text for local runs and tests.
Every JSON record is tagged with the service name so Jobly's logs can be
picked out of a shared stream.
"""

import logging
import sys
from typing import Any, Dict, Iterable
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

# Libraries that log every statement or hash check at INFO
QUIET_LOGGERS: Dict[str, int] = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter stamping service, UTC time and source location.
    """

    def __init__(self, *args, service_name: str = "jobly", **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = self.service_name
        log_record['timestamp'] = datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z')
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"


def build_handler(json_logs: bool, service_name: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(CustomJsonFormatter('%(message)s', service_name=service_name))
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
    return handler


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: str = "jobly",
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> None:
    """
    Replace the root logger's handlers with a single stdout handler.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ...)
        json_logs: JSON lines when True, plain text otherwise
        service_name: Value of the ``service`` field on JSON records
        quiet: Logger names from QUIET_LOGGERS to raise to their listed level
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(build_handler(json_logs, service_name))

    for name in quiet:
        logging.getLogger(name).setLevel(QUIET_LOGGERS.get(name, logging.WARNING))
