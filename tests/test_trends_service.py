from __future__ import annotations

from typing import List, Optional

import pytest
from pydantic import ValidationError

from app.models.trends import SourceTag, TrendItem
from app.models.trends_public import AllInput, AnalyzeInput, LimitInput
from services import trends_service
from services.trend_aggregator import AggregationFailed
from services.trend_source_base import SourceUnavailable
from tests.fixtures import StubAdapter, make_item


class CoinsAndNftsAdapter(StubAdapter):
    """Crypto stub returning both coins and NFTs, like the trending endpoint."""

    def __init__(self, coins, nfts) -> None:
        super().__init__(SourceTag.CRYPTO)
        self.coins = list(coins)
        self.nfts = list(nfts)

    async def _fetch_items(self, limit: Optional[int]) -> List[TrendItem]:
        self.received_limits.append(limit)
        return [
            make_item(name, SourceTag.CRYPTO, rank=i, metadata={"symbol": symbol})
            for i, (name, symbol) in enumerate(self.coins, start=1)
        ] + [
            make_item(name, SourceTag.CRYPTO, rank=i, category="nft")
            for i, name in enumerate(self.nfts, start=1)
        ]


def _adapters():
    return {
        SourceTag.SOCIAL: StubAdapter(
            SourceTag.SOCIAL,
            [f"Trend {i}" for i in range(1, 21)],
            degrade_on_failure=True,
        ),
        SourceTag.NEWS: StubAdapter(
            SourceTag.NEWS,
            ["Solana outage postmortem", "Bitcoin ETF flows", "Rust 2.0 roadmap", "Show HN: tiny db", "Ask HN: jobs"],
        ),
        SourceTag.CRYPTO: CoinsAndNftsAdapter(
            coins=[("Bitcoin", "BTC"), ("Solana", "SOL"), ("Pepe", "PEPE"), ("Sui", "SUI")],
            nfts=["Pudgy Penguins", "Milady"],
        ),
    }


@pytest.mark.asyncio
async def test_overview_returns_top_three_per_source():
    adapters = _adapters()

    result = await trends_service.overview(adapters=adapters)

    assert [t.topic for t in result.x] == ["Trend 1", "Trend 2", "Trend 3"]
    assert [s.title for s in result.hackernews] == [
        "Solana outage postmortem",
        "Bitcoin ETF flows",
        "Rust 2.0 roadmap",
    ]
    assert [c.name for c in result.crypto.coins] == ["Bitcoin", "Solana", "Pepe"]
    assert [n.name for n in result.crypto.nfts] == ["Pudgy Penguins", "Milady"]
    assert adapters[SourceTag.NEWS].received_limits == [3]
    assert result.sources == ["X/Twitter", "HackerNews", "CoinGecko"]


@pytest.mark.asyncio
async def test_overview_wraps_source_failure():
    adapters = _adapters()
    adapters[SourceTag.NEWS] = StubAdapter(SourceTag.NEWS, error=RuntimeError("timeout"))

    with pytest.raises(AggregationFailed) as exc:
        await trends_service.overview(adapters=adapters)

    assert exc.value.source is SourceTag.NEWS


@pytest.mark.asyncio
async def test_hackernews_passes_limit_and_counts():
    adapters = _adapters()

    result = await trends_service.hackernews(LimitInput(limit=2), adapters=adapters)

    assert result.count == 2
    assert [s.rank for s in result.stories] == [1, 2]
    assert adapters[SourceTag.NEWS].received_limits == [2]
    assert result.source == "https://news.ycombinator.com"


@pytest.mark.asyncio
async def test_hackernews_propagates_source_unavailable():
    adapters = _adapters()
    adapters[SourceTag.NEWS] = StubAdapter(SourceTag.NEWS, error=RuntimeError("503"))

    with pytest.raises(SourceUnavailable) as exc:
        await trends_service.hackernews(adapters=adapters)

    assert exc.value.source is SourceTag.NEWS


@pytest.mark.asyncio
async def test_crypto_splits_coins_and_nfts():
    result = await trends_service.crypto(adapters=_adapters())

    assert [c.symbol for c in result.coins] == ["BTC", "SOL", "PEPE", "SUI"]
    assert [n.name for n in result.nfts] == ["Pudgy Penguins", "Milady"]
    assert (result.total_coins, result.total_nfts) == (4, 2)


@pytest.mark.asyncio
async def test_twitter_truncates_to_limit():
    adapters = _adapters()

    result = await trends_service.twitter(LimitInput(limit=5), adapters=adapters)

    assert result.count == 5
    assert [t.topic for t in result.trends][-1] == "Trend 5"
    assert adapters[SourceTag.SOCIAL].received_limits == [None]


@pytest.mark.asyncio
async def test_twitter_returns_placeholder_when_degraded():
    adapters = _adapters()
    adapters[SourceTag.SOCIAL] = StubAdapter(SourceTag.SOCIAL, error=RuntimeError("403"), degrade_on_failure=True)

    result = await trends_service.twitter(adapters=adapters)

    assert result.count == 1
    assert result.trends[0].category == "error"


@pytest.mark.asyncio
async def test_all_sources_applies_limit_to_news_and_social_display():
    adapters = _adapters()

    result = await trends_service.all_sources(AllInput(limit=4), adapters=adapters)

    assert adapters[SourceTag.NEWS].received_limits == [4]
    assert result.hackernews.count == 4
    assert result.x.count == 4
    assert result.crypto.total_coins == 4
    assert result.crypto.total_nfts == 2


@pytest.mark.asyncio
async def test_analyze_correlates_and_filters_keywords():
    adapters = _adapters()
    adapters[SourceTag.SOCIAL] = StubAdapter(SourceTag.SOCIAL, ["Solana", "#WorldCup"], degrade_on_failure=True)

    result = await trends_service.analyze(AnalyzeInput(keywords=["sol", "world cup"]), adapters=adapters)

    assert adapters[SourceTag.NEWS].received_limits == [30]
    assert [r.keyword for r in result.cross_platform_topics][0] == "solana"
    assert result.cross_platform_topics[0].sources == [SourceTag.SOCIAL, SourceTag.NEWS, SourceTag.CRYPTO]
    assert result.summary.top_x == ["Solana", "#WorldCup"]
    assert result.summary.top_crypto[:2] == ["Bitcoin (BTC)", "Solana (SOL)"]

    sol, world_cup = result.keyword_analysis
    assert (sol.on_social, sol.on_news, sol.on_crypto) == (True, True, True)
    assert (world_cup.on_social, world_cup.on_news, world_cup.on_crypto) == (False, False, False)


@pytest.mark.asyncio
async def test_analyze_without_keywords_has_no_keyword_analysis():
    result = await trends_service.analyze(adapters=_adapters())

    assert result.keyword_analysis is None
    assert "HackerNews" in result.methodology


def test_limit_inputs_are_bounded():
    with pytest.raises(ValidationError):
        LimitInput(limit=0)
    with pytest.raises(ValidationError):
        LimitInput(limit=51)
    with pytest.raises(ValidationError):
        AllInput(limit=31)
    assert AllInput().limit == 20
