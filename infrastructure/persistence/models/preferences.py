from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


def _utcnow() -> datetime:
	return datetime.now(UTC)


class PreferenceDB(Base):
	__tablename__ = 'display_preferences'

	key: Mapped[str] = mapped_column(String(64), primary_key=True)
	value: Mapped[str] = mapped_column(Text, nullable=False)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
	)
