from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.trends import KeywordPresence, KeywordRecord, TrendItem

SOURCE_LABELS: List[str] = ["X/Twitter", "HackerNews", "CoinGecko"]


# ---- Inputs -----------------------------------------------------------------

class LimitInput(BaseModel):
    """Input of the single-source `hackernews` and `twitter` operations."""

    limit: int = Field(default=20, ge=1, le=50)


class AllInput(BaseModel):
    limit: int = Field(default=20, ge=1, le=30)


class AnalyzeInput(BaseModel):
    keywords: List[str] = Field(default_factory=list)


# ---- Per-source payload rows ------------------------------------------------

class SocialTrend(BaseModel):
    rank: int
    topic: str
    category: str
    related: List[str] = Field(default_factory=list)


class NewsStory(BaseModel):
    rank: int
    title: str
    score: Optional[int] = None
    url: Optional[str] = None
    id: Optional[int] = None


class CryptoCoin(BaseModel):
    rank: int
    name: str
    symbol: Optional[str] = None
    thumb: Optional[str] = None


class CryptoNft(BaseModel):
    name: str
    symbol: Optional[str] = None
    thumb: Optional[str] = None


def social_trend_from_item(item: TrendItem) -> SocialTrend:
    return SocialTrend(
        rank=item.rank,
        topic=item.label,
        category=item.category,
        related=list(item.metadata.get("related") or []),
    )


def news_story_from_item(item: TrendItem) -> NewsStory:
    return NewsStory(
        rank=item.rank,
        title=item.label,
        score=item.metadata.get("score"),
        url=item.metadata.get("url"),
        id=item.metadata.get("id"),
    )


def crypto_coin_from_item(item: TrendItem) -> CryptoCoin:
    return CryptoCoin(
        rank=item.rank,
        name=item.label,
        symbol=item.metadata.get("symbol"),
        thumb=item.metadata.get("thumb"),
    )


def crypto_nft_from_item(item: TrendItem) -> CryptoNft:
    return CryptoNft(name=item.label, symbol=item.metadata.get("symbol"), thumb=item.metadata.get("thumb"))


# ---- Operation outputs ------------------------------------------------------

class CryptoBlock(BaseModel):
    coins: List[CryptoCoin]
    nfts: List[CryptoNft]


class OverviewResponse(BaseModel):
    """Top 3 per source."""

    x: List[SocialTrend]
    hackernews: List[NewsStory]
    crypto: CryptoBlock
    fetched_at: datetime
    sources: List[str] = Field(default_factory=lambda: list(SOURCE_LABELS))


class HackerNewsResponse(BaseModel):
    stories: List[NewsStory]
    count: int
    fetched_at: datetime
    source: str = "https://news.ycombinator.com"


class CryptoResponse(BaseModel):
    coins: List[CryptoCoin]
    nfts: List[CryptoNft]
    total_coins: int
    total_nfts: int
    fetched_at: datetime
    source: str = "https://www.coingecko.com"


class TwitterResponse(BaseModel):
    trends: List[SocialTrend]
    count: int
    fetched_at: datetime
    source: str = "X/Twitter"


class SocialBlock(BaseModel):
    trends: List[SocialTrend]
    count: int


class NewsBlock(BaseModel):
    stories: List[NewsStory]
    count: int


class CryptoTotalsBlock(BaseModel):
    coins: List[CryptoCoin]
    nfts: List[CryptoNft]
    total_coins: int
    total_nfts: int


class AllSourcesResponse(BaseModel):
    x: SocialBlock
    hackernews: NewsBlock
    crypto: CryptoTotalsBlock
    fetched_at: datetime
    sources: List[str] = Field(default_factory=lambda: list(SOURCE_LABELS))


class AnalyzeSummary(BaseModel):
    top_x: List[str]
    top_hn: List[str]
    top_crypto: List[str]


class AnalyzeResponse(BaseModel):
    cross_platform_topics: List[KeywordRecord]
    summary: AnalyzeSummary
    keyword_analysis: Optional[List[KeywordPresence]] = None
    fetched_at: datetime
    methodology: str = (
        "Keywords extracted and compared across X, HackerNews, and CoinGecko trending data"
    )
