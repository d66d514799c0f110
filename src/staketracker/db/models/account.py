from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from staketracker.db.session import Base, TimestampMixin


class Account(TimestampMixin, Base):
    """Upstream platform user. Primary key is the platform-issued id."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), default=None)

    @property
    def display_name(self) -> str:
        return self.name or self.id
