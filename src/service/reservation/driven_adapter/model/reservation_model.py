from datetime import datetime
from decimal import Decimal
import uuid
from typing import Optional

from sqlalchemy import JSON, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservation'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    showing_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    ticket_count: Mapped[int] = mapped_column(Integer, nullable=False)
    price_paid: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='RESERVED')
    reservation_type: Mapped[str] = mapped_column(String(30), nullable=False)
    selected_seating: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    snapshot: Mapped[dict] = mapped_column(JSON, nullable=False)
    date_reserved: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    date_paid: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    date_cancelled: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    date_refunded: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    date_expired: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
