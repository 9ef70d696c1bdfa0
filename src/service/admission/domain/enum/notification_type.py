from enum import StrEnum


class NotificationType(StrEnum):
    INFO = 'info'
    SUCCESS = 'success'
    WARNING = 'warning'
    ERROR = 'error'
