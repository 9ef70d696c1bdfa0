from datetime import datetime, timezone
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.ticket_entry_use_case import TicketEntryUseCase
from src.service.admission.app.dto.scan_result import (
    MESSAGE_BLANK_QR,
    MESSAGE_UNKNOWN_QR,
    ScanResult,
)
from src.service.admission.domain.admission_defaults import resolve_gate


class ScanTicketUseCase(TicketEntryUseCase):
    """
    Check a ticket in by its QR token.

    Bad input never raises: a blank or unknown code comes back as an
    `invalid` ScanResult and nothing is written.
    """

    @Logger.io
    async def scan(self, *, qr_code: Optional[str], gate: Optional[str] = None) -> ScanResult:
        gate = resolve_gate(gate)
        scanned_at = datetime.now(timezone.utc)

        if qr_code is None or not qr_code.strip():
            return ScanResult.invalid(message=MESSAGE_BLANK_QR, gate=gate, scanned_at=scanned_at)

        with self.tracer.start_as_current_span('use_case.scan_ticket', attributes={'gate': gate}):
            async with self.uow_factory() as uow:
                ticket = await uow.ticket_repo.get_by_qr_code(
                    qr_code=qr_code.strip(), for_update=True
                )
                if not ticket:
                    Logger.base.info(f'❓ [SCAN] Unknown QR code at {gate}')
                    return ScanResult.invalid(
                        message=MESSAGE_UNKNOWN_QR, gate=gate, scanned_at=scanned_at
                    )

                result = await self._process_entry(
                    uow=uow, ticket=ticket, gate=gate, scanned_at=scanned_at
                )
                await uow.commit()

            await self._notify_checked_in(result=result, user_id=ticket.user_id)
            return result
