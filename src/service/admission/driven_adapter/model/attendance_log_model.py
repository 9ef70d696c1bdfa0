from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class AttendanceLogModel(Base):
    __tablename__ = 'attendance_log'
    __table_args__ = (
        Index('ix_attendance_log_ticket_start', 'ticket_id', 'start_time'),
        Index('ix_attendance_log_event_start', 'event_id', 'start_time'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('ticket.id', ondelete='CASCADE'), nullable=False
    )
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('event.id', ondelete='CASCADE'), nullable=False
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey('app_user.id'), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    gate: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    re_entry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
