"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.admission.app.command import (
    book_tickets_use_case,
    bulk_check_in_use_case,
    mark_notification_read_use_case,
    ticket_entry_use_case,
)
from src.service.admission.app.query import (
    get_event_attendance_use_case,
    list_notifications_use_case,
    ticket_query_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    book_tickets_use_case,
    ticket_entry_use_case,
    bulk_check_in_use_case,
    mark_notification_read_use_case,
    ticket_query_use_case,
    get_event_attendance_use_case,
    list_notifications_use_case,
]
