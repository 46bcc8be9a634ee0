from datetime import date
from typing import Optional

from sqlalchemy import JSON, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(250), nullable=False)
    original_title: Mapped[Optional[str]] = mapped_column(String(250), nullable=True)
    tagline: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    release_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    genres: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    runtime: Mapped[int] = mapped_column(Integer, nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False)
