"""
HackerNews top stories adapter.

Reads the ranked id list, then every story detail concurrently. A partial
ranked list is useless, so any failed request raises ``SourceUnavailable``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.config import settings
from app.core.logging import get_logger
from app.models.trends import SourceTag, TrendItem
from services.base_scraper_service import BaseScraperService
from services.trend_source_base import TrendSourceAdapter

logger = get_logger().bind(module="news_ranking_service")

DEFAULT_NEWS_LIMIT = 30
HN_ITEM_PAGE_URL = "https://news.ycombinator.com/item?id={id}"


class NewsRankingAdapter(TrendSourceAdapter):
    source_tag = SourceTag.NEWS
    provenance = "HackerNews"
    degrade_on_failure = False

    def __init__(
        self,
        *,
        api_url: Optional[str] = None,
        max_concurrency: Optional[int] = None,
        user_agent: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.api_url = (api_url or settings.HACKERNEWS_API_URL).rstrip("/")
        self.max_concurrency = max_concurrency or settings.NEWS_DETAIL_MAX_CONCURRENCY
        self.user_agent = user_agent or settings.HTTP_USER_AGENT
        self.timeout_s = timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S

    async def _fetch_items(self, limit: Optional[int]) -> List[TrendItem]:
        limit = DEFAULT_NEWS_LIMIT if limit is None else limit

        async with BaseScraperService(
            user_agent=self.user_agent,
            timeout_s=self.timeout_s,
            max_concurrency=self.max_concurrency,
        ) as scraper:
            top_ids = await scraper.fetch_json(f"{self.api_url}/topstories.json")
            if not isinstance(top_ids, list):
                raise ValueError(f"unexpected top stories payload: {type(top_ids).__name__}")
            story_ids = top_ids[:limit]

            async def _fetch_story(story_id: Any) -> Dict[str, Any]:
                story = await scraper.fetch_json(f"{self.api_url}/item/{story_id}.json")
                if not isinstance(story, dict):
                    raise ValueError(f"story {story_id} returned no data")
                return story

            stories = await scraper.gather_bounded(_fetch_story, story_ids)

        logger.info("news_ranking_fetched", requested=limit, stories_count=len(stories))
        return self.build_items(
            {
                "rank": position,
                "label": story.get("title"),
                "category": "story",
                "metadata": {
                    "id": story.get("id"),
                    "score": story.get("score"),
                    "url": story.get("url") or HN_ITEM_PAGE_URL.format(id=story.get("id")),
                },
            }
            for position, story in enumerate(stories, start=1)
        )
