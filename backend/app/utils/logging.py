# backend/app/utils/logging.py
import logging
import sys
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional

from ..config import settings

ROOT_LOGGER_NAME = "blueprint"

console_formatter = logging.Formatter(
    '\033[1;36m%(asctime)s\033[0m - \033[1;33m%(name)s\033[0m - \033[1;35m%(levelname)s\033[0m [\033[1;34m%(module)s:%(lineno)d\033[0m] - %(message)s'
)
file_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)

# Everything a bare LogRecord carries, plus the attributes formatters add later
RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class BlueprintLogger:
    """Component logger for the blueprint service.

    Each component writes to its own rotating file under ``LOGS_PATH`` and to
    stdout. Structured ``extra`` keys that would overwrite ``LogRecord``
    attributes (``name`` is the usual offender, since projects and documents
    both have one) are renamed with an ``extra_`` prefix instead of raising.
    """

    def __init__(self, component: str, level: Optional[str] = None):
        self.component = component
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")
        self.logger.setLevel((level or settings.LOG_LEVEL).upper())
        self.setup_handlers()

    @property
    def log_file(self):
        return settings.LOGS_PATH / f"{self.component}.log"

    def setup_handlers(self):
        if self.logger.handlers:
            return

        settings.LOGS_PATH.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

    @staticmethod
    def sanitize_extra(extra: Optional[Dict]) -> Optional[Dict]:
        if extra is None:
            return None
        return {
            (f"extra_{key}" if key in RESERVED_ATTRS else key): value
            for key, value in extra.items()
        }

    def log(self, level: int, msg, extra=None, exc_info=None):
        # stacklevel=3 so module:lineno point at the caller, not this wrapper
        self.logger.log(level, msg, extra=self.sanitize_extra(extra), exc_info=exc_info, stacklevel=3)

    def debug(self, msg, extra=None, exc_info=None):
        self.log(logging.DEBUG, msg, extra, exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self.log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self.log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self.log(logging.ERROR, msg, extra, exc_info)

    def critical(self, msg, extra=None, exc_info=None):
        self.log(logging.CRITICAL, msg, extra, exc_info)

    @contextmanager
    def timed(self, msg, extra=None):
        """Log ``msg`` with ``execution_time_ms`` once the block finishes.

        The yielded dict can be filled with more fields inside the block.
        Nothing is logged when the block raises.
        """
        fields = dict(extra or {})
        start_time = time.perf_counter()
        yield fields
        fields["execution_time_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
        self.logger.info(msg, extra=self.sanitize_extra(fields), stacklevel=3)


_loggers: Dict[str, BlueprintLogger] = {}


def get_logger(component: str) -> BlueprintLogger:
    if component not in _loggers:
        _loggers[component] = BlueprintLogger(component)
    return _loggers[component]


api_logger = get_logger("api")
db_logger = get_logger("database")
service_logger = get_logger("service")
ai_logger = get_logger("ai")

__all__ = [
    "BlueprintLogger", "RESERVED_ATTRS", "get_logger",
    "api_logger", "db_logger", "service_logger", "ai_logger"
]
