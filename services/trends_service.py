"""
The named trend operations.

Each operation takes an already validated input model and returns a public
payload stamped with the capture time. Aggregating operations raise
``AggregationFailed``; the single-source ``hackernews`` and ``crypto``
operations raise ``SourceUnavailable``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping, Optional

from app.core.logging import get_logger
from app.models.trends import SourceTag
from app.models.trends_public import (
    AllInput,
    AllSourcesResponse,
    AnalyzeInput,
    AnalyzeResponse,
    AnalyzeSummary,
    CryptoBlock,
    CryptoResponse,
    CryptoTotalsBlock,
    HackerNewsResponse,
    LimitInput,
    NewsBlock,
    OverviewResponse,
    SocialBlock,
    TwitterResponse,
    crypto_coin_from_item,
    crypto_nft_from_item,
    news_story_from_item,
    social_trend_from_item,
)
from services.keyword_filter import filter_by_keywords
from services.trend_aggregator import ALL_SOURCES, aggregate, default_adapters
from services.trend_correlator import correlate, summarize
from services.trend_source_base import TrendSourceAdapter

logger = get_logger().bind(module="trends_service")

OVERVIEW_TOP_N = 3
ANALYZE_NEWS_LIMIT = 30

Adapters = Optional[Mapping[SourceTag, TrendSourceAdapter]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _adapter(adapters: Adapters, tag: SourceTag) -> TrendSourceAdapter:
    return (adapters if adapters is not None else default_adapters())[tag]


async def overview(*, adapters: Adapters = None) -> OverviewResponse:
    snapshot = await aggregate(ALL_SOURCES, {SourceTag.NEWS: OVERVIEW_TOP_N}, adapters=adapters)
    return OverviewResponse(
        x=[social_trend_from_item(i) for i in snapshot.for_source(SourceTag.SOCIAL)[:OVERVIEW_TOP_N]],
        hackernews=[news_story_from_item(i) for i in snapshot.for_source(SourceTag.NEWS)[:OVERVIEW_TOP_N]],
        crypto=CryptoBlock(
            coins=[crypto_coin_from_item(i) for i in snapshot.coins()[:OVERVIEW_TOP_N]],
            nfts=[crypto_nft_from_item(i) for i in snapshot.nfts()[:OVERVIEW_TOP_N]],
        ),
        fetched_at=snapshot.fetched_at,
    )


async def hackernews(params: LimitInput = LimitInput(), *, adapters: Adapters = None) -> HackerNewsResponse:
    items = await _adapter(adapters, SourceTag.NEWS).fetch(params.limit)
    stories = [news_story_from_item(i) for i in items]
    return HackerNewsResponse(stories=stories, count=len(stories), fetched_at=_now())


async def crypto(*, adapters: Adapters = None) -> CryptoResponse:
    items = await _adapter(adapters, SourceTag.CRYPTO).fetch()
    coins = [crypto_coin_from_item(i) for i in items if i.category == "coin"]
    nfts = [crypto_nft_from_item(i) for i in items if i.category == "nft"]
    return CryptoResponse(
        coins=coins,
        nfts=nfts,
        total_coins=len(coins),
        total_nfts=len(nfts),
        fetched_at=_now(),
    )


async def twitter(params: LimitInput = LimitInput(), *, adapters: Adapters = None) -> TwitterResponse:
    items = await _adapter(adapters, SourceTag.SOCIAL).fetch()
    trends = [social_trend_from_item(i) for i in items[: params.limit]]
    return TwitterResponse(trends=trends, count=len(trends), fetched_at=_now())


async def all_sources(params: AllInput = AllInput(), *, adapters: Adapters = None) -> AllSourcesResponse:
    snapshot = await aggregate(ALL_SOURCES, {SourceTag.NEWS: params.limit}, adapters=adapters)

    trends = [social_trend_from_item(i) for i in snapshot.for_source(SourceTag.SOCIAL)[: params.limit]]
    stories = [news_story_from_item(i) for i in snapshot.for_source(SourceTag.NEWS)]
    coins = [crypto_coin_from_item(i) for i in snapshot.coins()]
    nfts = [crypto_nft_from_item(i) for i in snapshot.nfts()]
    return AllSourcesResponse(
        x=SocialBlock(trends=trends, count=len(trends)),
        hackernews=NewsBlock(stories=stories, count=len(stories)),
        crypto=CryptoTotalsBlock(coins=coins, nfts=nfts, total_coins=len(coins), total_nfts=len(nfts)),
        fetched_at=snapshot.fetched_at,
    )


async def analyze(params: AnalyzeInput = AnalyzeInput(), *, adapters: Adapters = None) -> AnalyzeResponse:
    snapshot = await aggregate(ALL_SOURCES, {SourceTag.NEWS: ANALYZE_NEWS_LIMIT}, adapters=adapters)

    cross_platform = correlate(snapshot)
    summary = summarize(snapshot)
    logger.info(
        "trend_analysis_completed",
        cross_platform_count=len(cross_platform),
        keywords_count=len(params.keywords),
    )
    return AnalyzeResponse(
        cross_platform_topics=cross_platform,
        summary=AnalyzeSummary(
            top_x=summary.top_social,
            top_hn=summary.top_news,
            top_crypto=summary.top_crypto,
        ),
        keyword_analysis=filter_by_keywords(snapshot, params.keywords),
        fetched_at=snapshot.fetched_at,
    )
