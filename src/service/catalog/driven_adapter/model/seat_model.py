from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (UniqueConstraint('screen_id', 'row', 'number', name='uq_seat_position'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    screen_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('screen.id'), nullable=False, index=True
    )
    row: Mapped[str] = mapped_column(String(10), nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_label: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    seat_type: Mapped[str] = mapped_column(String(20), nullable=False)
    layout_type: Mapped[str] = mapped_column(String(10), nullable=False, default='SEAT')
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    price_multiplier: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal('1')
    )
