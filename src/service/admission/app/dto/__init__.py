"""Application layer DTOs"""

from src.service.admission.app.dto.bulk_check_in_summary import BulkCheckInSummary
from src.service.admission.app.dto.event_attendance_summary import EventAttendanceSummary
from src.service.admission.app.dto.scan_result import ScanResult

__all__ = ['BulkCheckInSummary', 'EventAttendanceSummary', 'ScanResult']
