#!/usr/bin/env python3

"""
Command line entry point for Trendcast: the batch forecast job and one-off analyses printed as JSON.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

import database
from api.responses import (
    AnomalyReportPayload,
    ComparisonPayload,
    CorrelationsPayload,
    FailurePayload,
    ForecastPayload,
    StatisticsPayload,
)
from config import STORE_BACKEND_SQL, settings
from datasources.base import SeriesStore
from datasources.exceptions import SeriesStoreError
from datasources.factory import SeriesStoreFactory
from engine.enums import ForecastModel, Timeframe
from engine.predictor import TrendPredictor
from engine.result import is_failure
from services.batch_service import run_batch
from store.client import close_redis

log = logging.getLogger("trendcast")


def _emit(result: Any, payload_cls: Any) -> int:
    if is_failure(result):
        body = FailurePayload.from_failure(result).model_dump(mode="json")
        code = 2
    else:
        body = payload_cls.from_result(result).model_dump(mode="json", exclude_none=True)
        code = 0
    json.dump(body, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return code


def _horizon(value: str) -> int:
    steps = int(value)
    if not 1 <= steps <= settings.forecast_max_horizon:
        raise argparse.ArgumentTypeError(f"horizon must be between 1 and {settings.forecast_max_horizon}")
    return steps


def _confidence(value: str) -> float:
    level = float(value)
    if not 0 < level < 1:
        raise argparse.ArgumentTypeError("confidence must be strictly between 0 and 1")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trendcast", description="Search term trend forecasting")
    parser.add_argument("--log-level", default="INFO")
    sub = parser.add_subparsers(dest="command", required=True)

    batch = sub.add_parser("batch", help="forecast the most active terms and publish the results")
    batch.add_argument("--top", type=int, default=None)
    batch.add_argument("--horizon", type=_horizon, default=None)
    batch.add_argument("--timeframe", action="append", choices=[t.value for t in Timeframe])

    forecast = sub.add_parser("forecast", help="forecast one term with prediction intervals")
    forecast.add_argument("term")
    forecast.add_argument("--model", default=ForecastModel.ensemble.value, choices=[m.value for m in ForecastModel])
    forecast.add_argument("--horizon", type=_horizon, default=None)
    forecast.add_argument("--confidence", type=_confidence, default=None)
    forecast.add_argument("--timeframe", default=Timeframe.daily.value, choices=[t.value for t in Timeframe])

    for name, help_text in (("stats", "descriptive statistics"), ("anomalies", "rolling-window anomalies")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("term")
        p.add_argument("--timeframe", default=Timeframe.daily.value, choices=[t.value for t in Timeframe])

    compare = sub.add_parser("compare", help="compare two terms")
    compare.add_argument("first")
    compare.add_argument("second")
    compare.add_argument("--timeframe", default=Timeframe.daily.value, choices=[t.value for t in Timeframe])

    sub.add_parser("init-db", help="create the term and period count tables")

    corr = sub.add_parser("correlations", help="correlation matrix across terms")
    corr.add_argument("terms", nargs="+")
    corr.add_argument("--timeframe", default=Timeframe.daily.value, choices=[t.value for t in Timeframe])
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    store = SeriesStoreFactory.create(settings)
    try:
        return await _dispatch(args, store)
    finally:
        await close_redis()
        database.dispose_database()


async def _dispatch(args: argparse.Namespace, store: SeriesStore) -> int:
    if args.command == "init-db":
        if settings.store_backend != STORE_BACKEND_SQL:
            log.error("init-db needs the sql store backend, not %r", settings.store_backend)
            return 1
        database.init_db()
        log.info("schema ready")
        return 0
    if args.command == "batch":
        summary = await run_batch(store, args.top, args.horizon, args.timeframe)
        return 0 if summary.failed == 0 else 1

    predictor = TrendPredictor(store)
    if args.command == "forecast":
        result = await predictor.forecast_with_intervals(
            args.term, args.model, args.horizon, args.timeframe, args.confidence
        )
        return _emit(result, ForecastPayload)
    if args.command == "stats":
        return _emit(await predictor.analyze_statistics(args.term, args.timeframe), StatisticsPayload)
    if args.command == "anomalies":
        return _emit(await predictor.detect_anomalies(args.term, args.timeframe), AnomalyReportPayload)
    if args.command == "compare":
        return _emit(await predictor.compare_trends(args.first, args.second, args.timeframe), ComparisonPayload)
    return _emit(await predictor.find_correlations(args.terms, args.timeframe), CorrelationsPayload)


def cli() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except SeriesStoreError as exc:
        log.error("Series store error: %s", exc)
        sys.exit(3)
    except ValueError as exc:
        log.error("Invalid request: %s", exc)
        sys.exit(2)


if __name__ == "__main__":
    cli()
