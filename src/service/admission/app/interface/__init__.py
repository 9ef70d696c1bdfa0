"""Application layer interfaces (Ports)"""

from src.service.admission.app.interface.i_attendance_log_repo import IAttendanceLogRepo
from src.service.admission.app.interface.i_event_repo import IEventRepo
from src.service.admission.app.interface.i_notification_emitter import INotificationEmitter
from src.service.admission.app.interface.i_notification_repo import INotificationRepo
from src.service.admission.app.interface.i_payment_recorder import IPaymentRecorder
from src.service.admission.app.interface.i_ticket_repo import ITicketRepo
from src.service.admission.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IAttendanceLogRepo',
    'IEventRepo',
    'INotificationEmitter',
    'INotificationRepo',
    'IPaymentRecorder',
    'ITicketRepo',
    'IUserQueryRepo',
]
