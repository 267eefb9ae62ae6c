# api/routers/trends.py
from __future__ import annotations

from typing import List, NoReturn, Optional

from fastapi import APIRouter, HTTPException, Query

from app.core.logging import get_logger
from app.models.trends_public import (
    AllInput,
    AllSourcesResponse,
    AnalyzeInput,
    AnalyzeResponse,
    CryptoResponse,
    HackerNewsResponse,
    LimitInput,
    OverviewResponse,
    TwitterResponse,
)
from services import trends_service
from services.trend_aggregator import AggregationFailed
from services.trend_source_base import SourceUnavailable

logger = get_logger().bind(module="trends_router")

router = APIRouter(prefix="/trends", tags=["trends"])


def _raise_upstream_error(exc: AggregationFailed | SourceUnavailable) -> NoReturn:
    logger.warning("trends_upstream_error", source=exc.source.value, error=str(exc))
    raise HTTPException(
        status_code=502,
        detail=str(exc),
        headers={"X-Trend-Source": exc.source.value},
    ) from exc


@router.get("/overview", response_model=OverviewResponse)
async def get_overview() -> OverviewResponse:
    """Top 3 trends from each source."""
    try:
        return await trends_service.overview()
    except AggregationFailed as exc:
        _raise_upstream_error(exc)


@router.get("/hackernews", response_model=HackerNewsResponse)
async def get_hackernews(limit: int = Query(20, ge=1, le=50)) -> HackerNewsResponse:
    try:
        return await trends_service.hackernews(LimitInput(limit=limit))
    except SourceUnavailable as exc:
        _raise_upstream_error(exc)


@router.get("/crypto", response_model=CryptoResponse)
async def get_crypto() -> CryptoResponse:
    try:
        return await trends_service.crypto()
    except SourceUnavailable as exc:
        _raise_upstream_error(exc)


@router.get("/twitter", response_model=TwitterResponse)
async def get_twitter(limit: int = Query(20, ge=1, le=50)) -> TwitterResponse:
    return await trends_service.twitter(LimitInput(limit=limit))


@router.get("/all", response_model=AllSourcesResponse)
async def get_all(limit: int = Query(20, ge=1, le=30)) -> AllSourcesResponse:
    try:
        return await trends_service.all_sources(AllInput(limit=limit))
    except AggregationFailed as exc:
        _raise_upstream_error(exc)


@router.get("/analyze", response_model=AnalyzeResponse)
async def get_analyze(
    keywords: Optional[List[str]] = Query(default=None, description="Keywords to look up on every source."),
) -> AnalyzeResponse:
    """Cross-platform analysis: keywords trending on more than one source."""
    try:
        return await trends_service.analyze(AnalyzeInput(keywords=keywords or []))
    except AggregationFailed as exc:
        _raise_upstream_error(exc)
