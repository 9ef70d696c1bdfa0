"""
Loguru sinks and shared state for LoguruIO

- stdout sink for every environment, hourly file sink in DEBUG
- stdlib logging (uvicorn, sqlalchemy, asyncio) routed into loguru
- context vars tracking call depth and chain start time across decorated calls
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import IS_TEST_LOG_DIR, LOG_DIR
from src.platform.logging.service_context import get_service_context


# QR tokens are bearer credentials at the gate; payment references identify a charge
SENSITIVE_KEYWORDS = {
    'qr_code',
    'transaction_reference',
}

DEPTH_LINE = '│ '

# Library loggers that only add noise below WARNING
QUIET_LOGGERS = ('asyncio', 'sqlalchemy.engine', 'sqlalchemy.pool')

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _default_extra() -> dict[str, Any]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


_intercept_bound_logger: 'LoguruLogger | None' = None


def _get_intercept_bound_logger() -> 'LoguruLogger':
    global _intercept_bound_logger
    if _intercept_bound_logger is None:
        _intercept_bound_logger = loguru_logger.bind(**_default_extra())
    return _intercept_bound_logger


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the original caller frame."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        _get_intercept_bound_logger().opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path(now: datetime) -> Path:
    prefix = 'test_' if IS_TEST_LOG_DIR else ''
    return LOG_DIR / f'{prefix}{now.strftime("%Y-%m-%d_%H")}.log'


loguru_logger.remove()
custom_logger = loguru_logger.bind(**_default_extra())

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# Production ships stdout to the log collector
if settings.DEBUG:
    custom_logger.add(
        str(_log_file_path(datetime.now(timezone.utc))),
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
for _name in QUIET_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)
