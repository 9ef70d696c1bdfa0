"""Admission Domain Enums"""

from src.service.admission.domain.enum.notification_type import NotificationType
from src.service.admission.domain.enum.scan_status import AttendanceStatus, ScanStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus

__all__ = ['AttendanceStatus', 'NotificationType', 'ScanStatus', 'TicketStatus']
