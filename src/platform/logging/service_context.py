"""
Service context for log lines.

Identifies which process wrote a line when several gate workers share one
log collector.
"""

from functools import lru_cache
import os
import socket

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    host = os.getenv('HOSTNAME') or socket.gethostname() or 'localhost'
    return f'{settings.SERVICE_NAME}@{deploy_env}:{host.split(".")[0]}:{os.getpid()}'
