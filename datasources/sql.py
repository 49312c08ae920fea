"""
SQL-backed series store reading aggregated per-period term counts through SQLAlchemy, with retries on transient connection errors.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from config import settings
from database import get_db_session
from datasources.base import SeriesStore
from datasources.exceptions import StoreUnavailable
from datasources.retry import retry
from db_models import PeriodCount, SearchTerm
from engine.enums import Timeframe
from engine.series import SeriesPoint, TimeSeries

log = logging.getLogger(__name__)


def _retrying(func):
    return retry(
        attempts=settings.store_retry_attempts,
        delay=settings.store_retry_delay,
        backoff=settings.store_retry_backoff,
        exceptions=(OperationalError,),
    )(func)


class SqlSeriesStore(SeriesStore):

    def _read_counts(self, term: str, timeframe: Timeframe, limit: int) -> List[Tuple[datetime, int]]:
        with get_db_session() as db:
            stmt = (
                select(PeriodCount.period, PeriodCount.count)
                .join(SearchTerm, SearchTerm.id == PeriodCount.term_id)
                .where(SearchTerm.term == term, PeriodCount.timeframe == timeframe.value)
                .order_by(desc(PeriodCount.period))
                .limit(limit)
            )
            rows = db.execute(stmt).all()
        return [(period, count) for period, count in reversed(rows)]

    def _read_top_terms(self, limit: int, since: datetime) -> List[str]:
        with get_db_session() as db:
            total = func.sum(PeriodCount.count).label("total")
            stmt = (
                select(SearchTerm.term, total)
                .join(PeriodCount, SearchTerm.id == PeriodCount.term_id)
                .where(PeriodCount.timeframe == Timeframe.daily.value, PeriodCount.period >= since)
                .group_by(SearchTerm.term)
                .order_by(desc(total), SearchTerm.term)
                .limit(limit)
            )
            return [row.term for row in db.execute(stmt).all()]

    async def get_series(self, term: str, timeframe: Timeframe, limit: int) -> TimeSeries:
        tf = Timeframe.parse(timeframe)
        if limit <= 0:
            return TimeSeries(term=term, timeframe=tf)
        try:
            rows = await asyncio.to_thread(_retrying(self._read_counts), term, tf, limit)
        except SQLAlchemyError as exc:
            log.warning("series read failed for %s/%s: %s", term, tf.value, exc)
            raise StoreUnavailable(f"series read failed for {term!r}") from exc
        log.debug("read %d %s points for %s", len(rows), tf.value, term)
        return TimeSeries(
            term=term,
            timeframe=tf,
            points=tuple(SeriesPoint(period=p, count=int(c)) for p, c in rows),
        )

    async def top_terms(self, limit: int) -> List[str]:
        since = datetime.now() - timedelta(days=settings.top_terms_window_days)
        try:
            return await asyncio.to_thread(_retrying(self._read_top_terms), limit, since)
        except SQLAlchemyError as exc:
            log.warning("top terms read failed: %s", exc)
            raise StoreUnavailable("top terms read failed") from exc
