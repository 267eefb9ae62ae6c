"""
Concurrent multi-source aggregation into a :class:`Snapshot`.

All requested adapters run at once via ``asyncio.gather``. The first
``SourceUnavailable`` fails the whole aggregation with ``AggregationFailed``;
sibling fetches are not cancelled, they finish on their own HTTP clients and
their results are discarded. There is no retry and no timeout here.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from app.core.logging import get_logger
from app.models.trends import SOURCE_ORDER, Snapshot, SourceTag, TrendItem
from services.crypto_trending_service import CryptoTrendingAdapter
from services.news_ranking_service import NewsRankingAdapter
from services.social_trends_service import SocialTrendsAdapter
from services.trend_source_base import SourceUnavailable, TrendSourceAdapter

logger = get_logger().bind(module="trend_aggregator")

ALL_SOURCES = frozenset(SOURCE_ORDER)


class AggregationFailed(Exception):
    """A propagating source failed; no partial snapshot is produced."""

    def __init__(self, source: SourceTag, message: str) -> None:
        super().__init__(message)
        self.source = source


def default_adapters() -> Dict[SourceTag, TrendSourceAdapter]:
    return {
        SourceTag.SOCIAL: SocialTrendsAdapter(),
        SourceTag.NEWS: NewsRankingAdapter(),
        SourceTag.CRYPTO: CryptoTrendingAdapter(),
    }


async def aggregate(
    sources: Iterable[SourceTag],
    per_source_limit: Optional[Mapping[SourceTag, int]] = None,
    *,
    adapters: Optional[Mapping[SourceTag, TrendSourceAdapter]] = None,
) -> Snapshot:
    wanted = set(sources)
    requested = [tag for tag in SOURCE_ORDER if tag in wanted]
    if not requested:
        raise ValueError("aggregate() needs at least one source")

    limits = per_source_limit or {}
    registry = adapters if adapters is not None else default_adapters()

    logger.info(
        "trend_aggregation_started",
        sources=[tag.value for tag in requested],
        limits={tag.value: value for tag, value in limits.items()},
    )

    try:
        results: List[List[TrendItem]] = await asyncio.gather(
            *(registry[tag].fetch(limits.get(tag)) for tag in requested)
        )
    except SourceUnavailable as exc:
        logger.error("trend_aggregation_failed", source=exc.source.value, error=exc.message)
        raise AggregationFailed(exc.source, f"Aggregation failed: {exc}") from exc

    snapshot = Snapshot(
        items={tag: tuple(items) for tag, items in zip(requested, results)},
        fetched_at=datetime.now(timezone.utc),
    )
    logger.info(
        "trend_aggregation_completed",
        counts={tag.value: len(items) for tag, items in snapshot.items.items()},
    )
    return snapshot
