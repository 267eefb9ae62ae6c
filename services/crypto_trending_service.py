"""CoinGecko trending coins / NFTs adapter."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.config import settings
from app.core.logging import get_logger
from app.models.trends import SourceTag, TrendItem
from services.base_scraper_service import BaseScraperService
from services.trend_source_base import TrendSourceAdapter

logger = get_logger().bind(module="crypto_trending_service")

CRYPTO_NFT_LIMIT = 5


def _positive_rank(value: Any, fallback: int) -> int:
    # market_cap_rank is null for freshly listed coins
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return fallback


class CryptoTrendingAdapter(TrendSourceAdapter):
    source_tag = SourceTag.CRYPTO
    provenance = "CoinGecko"
    degrade_on_failure = False

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.url = url or settings.COINGECKO_TRENDING_URL
        self.user_agent = user_agent or settings.HTTP_USER_AGENT
        self.timeout_s = timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S

    async def _fetch_items(self, limit: Optional[int]) -> List[TrendItem]:
        async with BaseScraperService(user_agent=self.user_agent, timeout_s=self.timeout_s) as scraper:
            data = await scraper.fetch_json(self.url)

        if not isinstance(data, dict):
            raise ValueError(f"unexpected trending payload: {type(data).__name__}")

        coins: List[Dict[str, Any]] = [entry["item"] for entry in data["coins"]]
        nfts: List[Dict[str, Any]] = list(data.get("nfts") or [])[:CRYPTO_NFT_LIMIT]

        entries = [
            {
                "rank": _positive_rank(coin.get("market_cap_rank"), position),
                "label": coin.get("name"),
                "category": "coin",
                "metadata": {"symbol": coin.get("symbol"), "thumb": coin.get("thumb")},
            }
            for position, coin in enumerate(coins, start=1)
        ]
        entries.extend(
            {
                "rank": position,
                "label": nft.get("name"),
                "category": "nft",
                "metadata": {"symbol": nft.get("symbol"), "thumb": nft.get("thumb")},
            }
            for position, nft in enumerate(nfts, start=1)
        )

        logger.info("crypto_trending_fetched", coins_count=len(coins), nfts_count=len(nfts))
        return self.build_items(entries)
