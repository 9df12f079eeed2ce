import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from screentime.database import Base
from screentime.types import TextArray


class ScreenTimeSettingsRecord(Base):
    """Stored screen-time settings, one row per child.

    Rows are written in full (defaults already merged), so every column is
    populated; ``normalize_settings`` still guards reads of older rows.
    """

    __tablename__ = "screen_time_settings"

    child_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("children.id", ondelete="CASCADE"), primary_key=True,
    )
    daily_limit: Mapped[int] = mapped_column(Integer, nullable=False)
    video_limit: Mapped[int] = mapped_column(Integer, nullable=False)
    book_limit: Mapped[int] = mapped_column(Integer, nullable=False)
    bedtime_start: Mapped[str] = mapped_column(String(5), nullable=False)  # "HH:MM"
    bedtime_end: Mapped[str] = mapped_column(String(5), nullable=False)    # "HH:MM"
    weekend_extension: Mapped[int] = mapped_column(Integer, nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    content_filtering: Mapped[str] = mapped_column(
        String(20), nullable=False
    )  # 'strict' | 'moderate' | 'relaxed'
    allowed_categories: Mapped[list[str]] = mapped_column(
        TextArray, nullable=False, default=list
    )
    reward_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    reward_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    child: Mapped["Child"] = relationship(back_populates="screen_time_settings")  # noqa: F821

    def __repr__(self) -> str:
        return f"<ScreenTimeSettingsRecord(child_id={self.child_id}, enabled={self.enabled})>"
