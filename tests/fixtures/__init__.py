# tests/fixtures/__init__.py
"""
Test fixtures for the trend aggregation tests.

Factory functions for creating test data:
- make_item()
- make_snapshot()
- StubAdapter (in-memory TrendSourceAdapter)
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Sequence

from app.models.trends import Snapshot, SourceTag, TrendItem
from services.trend_source_base import TrendSourceAdapter

_DEFAULT_CATEGORY = {
    SourceTag.SOCIAL: "trending",
    SourceTag.NEWS: "story",
    SourceTag.CRYPTO: "coin",
}


def make_item(
    label: str,
    source_tag: SourceTag,
    *,
    rank: int = 1,
    category: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> TrendItem:
    """Factory function to create a TrendItem."""
    return TrendItem(
        rank=rank,
        label=label,
        source_tag=source_tag,
        category=category or _DEFAULT_CATEGORY[source_tag],
        metadata=metadata or {},
    )


def make_snapshot(
    social: Optional[Sequence[str]] = None,
    news: Optional[Sequence[str]] = None,
    crypto: Optional[Sequence[str]] = None,
    *,
    symbols: Optional[Sequence[str]] = None,
) -> Snapshot:
    """
    Build a Snapshot from plain labels. A source passed as None is left out;
    crypto labels become coins, with optional symbols by position.
    """
    items: Dict[SourceTag, List[TrendItem]] = {}
    if social is not None:
        items[SourceTag.SOCIAL] = [
            make_item(label, SourceTag.SOCIAL, rank=i) for i, label in enumerate(social, start=1)
        ]
    if news is not None:
        items[SourceTag.NEWS] = [
            make_item(label, SourceTag.NEWS, rank=i) for i, label in enumerate(news, start=1)
        ]
    if crypto is not None:
        symbols = list(symbols or [])
        items[SourceTag.CRYPTO] = [
            make_item(
                label,
                SourceTag.CRYPTO,
                rank=i,
                metadata={"symbol": symbols[i - 1] if i <= len(symbols) else None},
            )
            for i, label in enumerate(crypto, start=1)
        ]
    return Snapshot(items=items)


class StubAdapter(TrendSourceAdapter):
    """In-memory adapter; honours the same failure policy as the real ones."""

    def __init__(
        self,
        source_tag: SourceTag,
        labels: Sequence[str] = (),
        *,
        error: Optional[Exception] = None,
        degrade_on_failure: bool = False,
        delay_s: float = 0.0,
        category: Optional[str] = None,
    ) -> None:
        self.source_tag = source_tag
        self.labels = list(labels)
        self.error = error
        self.degrade_on_failure = degrade_on_failure
        self.delay_s = delay_s
        self.category = category or _DEFAULT_CATEGORY[source_tag]
        self.received_limits: List[Optional[int]] = []
        self.completed = False

    async def _fetch_items(self, limit: Optional[int]) -> List[TrendItem]:
        self.received_limits.append(limit)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        self.completed = True
        if self.error is not None:
            raise self.error
        labels = self.labels if limit is None else self.labels[:limit]
        return self.build_items(
            {"rank": i, "label": label, "category": self.category}
            for i, label in enumerate(labels, start=1)
        )

    def degraded_items(self, *, reason: str) -> List[TrendItem]:
        return [make_item(f"stub {reason}", self.source_tag, category="error")]
