from typing import List

import attrs

from src.service.admission.app.dto.scan_result import ScanResult
from src.service.admission.domain.enum.scan_status import ScanStatus


@attrs.define(frozen=True)
class BulkCheckInSummary:
    """Counts partition `total`: successful + duplicate + invalid == total"""

    total: int
    successful: int
    duplicate: int
    invalid: int
    results: List[ScanResult] = attrs.field(factory=list)

    @classmethod
    def from_results(cls, results: List[ScanResult]) -> 'BulkCheckInSummary':
        successful = sum(1 for result in results if result.status == ScanStatus.VALID)
        duplicate = sum(1 for result in results if result.status == ScanStatus.DUPLICATE)
        return cls(
            total=len(results),
            successful=successful,
            duplicate=duplicate,
            invalid=len(results) - successful - duplicate,
            results=list(results),
        )
