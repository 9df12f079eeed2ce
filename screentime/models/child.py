import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from screentime.database import Base


class Child(Base):
    __tablename__ = "children"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    guardian_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    guardian_role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="parent"
    )  # 'parent' or 'educator'
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    screen_time_settings: Mapped["ScreenTimeSettingsRecord | None"] = relationship(  # noqa: F821
        back_populates="child", uselist=False, passive_deletes=True,
    )
    daily_usage: Mapped[list["DailyUsage"]] = relationship(  # noqa: F821
        back_populates="child", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Child(id={self.id}, name={self.name!r})>"
