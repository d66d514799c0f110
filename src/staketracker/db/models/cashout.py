"""Cashout events captured from the userscript."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from staketracker.db.session import Base


class Cashout(Base):
    """One settled round. Crypto columns always set; USD columns only when the client sent them."""

    __tablename__ = "cashouts"
    __table_args__ = (
        Index("ix_cashouts_account_id_payout_multiplier", "account_id", "payout_multiplier"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    account_id: Mapped[str] = mapped_column(ForeignKey("accounts.id"), index=True)
    game: Mapped[Optional[str]] = mapped_column(String(50), default=None)
    currency: Mapped[Optional[str]] = mapped_column(String(20), default=None)
    amount: Mapped[float] = mapped_column(Float, default=0.0)
    payout: Mapped[float] = mapped_column(Float, default=0.0)
    amount_multiplier: Mapped[float] = mapped_column(Float, default=0.0)
    payout_multiplier: Mapped[float] = mapped_column(Float, default=0.0, index=True)
    amount_usd: Mapped[Optional[float]] = mapped_column(Float, default=None)
    payout_usd: Mapped[Optional[float]] = mapped_column(Float, default=None)
    upstream_updated_at: Mapped[Optional[str]] = mapped_column(String(64), default=None)  # opaque, never parsed
    captured_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    raw_json: Mapped[Optional[str]] = mapped_column(Text, default=None)
