from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ScreenModel(Base):
    __tablename__ = 'screen'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    theatre_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('theatre.id'), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    screen_type: Mapped[str] = mapped_column(String(20), nullable=False)
