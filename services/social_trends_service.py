"""
X (Twitter) trending topics adapter.

Scrapes the public explore page without authentication. The page is expected
to block bots or change its markup, so this adapter never raises: an empty
extraction yields a ``notice`` placeholder, a failed request an ``error``
placeholder. Callers tell placeholders apart from real trends through
``TrendItem.category`` (or ``TrendItem.degraded``).
"""

from __future__ import annotations

from typing import List, Optional

from app.config import settings
from app.core.logging import get_logger
from app.models.trends import SourceTag, TrendItem
from services.base_scraper_service import BaseScraperService
from services.trend_markup_parsers import TrendMarkupParser, get_markup_parser
from services.trend_source_base import TrendSourceAdapter

logger = get_logger().bind(module="social_trends_service")

SOCIAL_TRENDS_MAX_ITEMS = 20

NOTICE_LABEL = "X API requires authentication"
ERROR_LABEL = "X trends temporarily unavailable"

_BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml",
}


class SocialTrendsAdapter(TrendSourceAdapter):
    source_tag = SourceTag.SOCIAL
    provenance = "X/Twitter"
    degrade_on_failure = True

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        parser: Optional[TrendMarkupParser] = None,
        user_agent: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.url = url or settings.SOCIAL_TRENDS_URL
        self.parser = parser or get_markup_parser(settings.SOCIAL_TRENDS_PARSER)
        self.user_agent = user_agent or settings.SOCIAL_USER_AGENT
        self.timeout_s = timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S

    async def _fetch_items(self, limit: Optional[int]) -> List[TrendItem]:
        cap = SOCIAL_TRENDS_MAX_ITEMS if limit is None else min(limit, SOCIAL_TRENDS_MAX_ITEMS)

        async with BaseScraperService(
            user_agent=self.user_agent,
            timeout_s=self.timeout_s,
            max_concurrency=1,
            headers=_BROWSER_HEADERS,
        ) as scraper:
            html = await scraper.fetch_html(self.url)

        labels = self.parser.parse(html)[:cap]
        logger.info("social_trends_extracted", parser=self.parser.name, topics_count=len(labels), html_length=len(html))
        return self.build_items(
            {"rank": position, "label": label, "category": "trending", "metadata": {"related": []}}
            for position, label in enumerate(labels, start=1)
        )

    def degraded_items(self, *, reason: str) -> List[TrendItem]:
        if reason == "empty":
            label, category = NOTICE_LABEL, "notice"
        else:
            label, category = ERROR_LABEL, "error"
        return [
            TrendItem(rank=1, label=label, source_tag=self.source_tag, category=category, metadata={"related": []})
        ]
