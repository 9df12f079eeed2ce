import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from screentime.database import Base
from screentime.types import TextArray


class DailyUsage(Base):
    __tablename__ = "daily_usage"
    __table_args__ = (
        UniqueConstraint("child_id", "date", name="uq_daily_usage_child_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    child_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    video_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    book_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_activity: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    categories_accessed: Mapped[list[str]] = mapped_column(
        TextArray, nullable=False, default=list
    )

    # Relationships
    child: Mapped["Child"] = relationship(back_populates="daily_usage")  # noqa: F821

    def __repr__(self) -> str:
        return f"<DailyUsage(child_id={self.child_id}, date={self.date}, total={self.total_minutes})>"
