from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ShowingModel(Base):
    __tablename__ = 'showing'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('movie.id'), nullable=False, index=True
    )
    theatre_id: Mapped[int] = mapped_column(Integer, ForeignKey('theatre.id'), nullable=False)
    screen_id: Mapped[int] = mapped_column(Integer, ForeignKey('screen.id'), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    ticket_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    language: Mapped[str] = mapped_column(String(10), nullable=False)
    subtitle_languages: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_special_event: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='SCHEDULED')
