"""
SQLAlchemy models for tracked search terms and their per-timeframe period counts.
"""
from __future__ import annotations

from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class SearchTerm(Base):
    __tablename__ = "search_terms"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    term: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    counts = relationship("PeriodCount", back_populates="term", cascade="all, delete-orphan")


class PeriodCount(Base):
    __tablename__ = "period_counts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    term_id: Mapped[int] = mapped_column(Integer, ForeignKey("search_terms.id", ondelete="CASCADE"), nullable=False)
    timeframe: Mapped[str] = mapped_column(String(16), nullable=False)
    period: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    term = relationship("SearchTerm", back_populates="counts")

    __table_args__ = (
        UniqueConstraint("term_id", "timeframe", "period", name="uq_period_counts_term_timeframe_period"),
        Index("ix_period_counts_term_timeframe_period", "term_id", "timeframe", "period"),
    )
