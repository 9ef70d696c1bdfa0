from enum import StrEnum


class ScanStatus(StrEnum):
    """Outcome of a single scan, returned to the gate"""

    VALID = 'valid'
    DUPLICATE = 'duplicate'
    INVALID = 'invalid'


class AttendanceStatus(StrEnum):
    """Status recorded on an attendance log row (invalid scans are never logged)"""

    VALID = 'valid'
    DUPLICATE = 'duplicate'
