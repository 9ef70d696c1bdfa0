"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.admission.driven_adapter.model.attendance_log_model import AttendanceLogModel
from src.service.admission.driven_adapter.model.event_model import EventModel
from src.service.admission.driven_adapter.model.notification_model import NotificationModel
from src.service.admission.driven_adapter.model.payment_model import PaymentModel
from src.service.admission.driven_adapter.model.ticket_model import TicketModel
from src.service.admission.driven_adapter.model.user_model import UserModel

__all__ = [
    'AttendanceLogModel',
    'EventModel',
    'NotificationModel',
    'PaymentModel',
    'TicketModel',
    'UserModel',
]
