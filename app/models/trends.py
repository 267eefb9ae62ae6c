"""Domain models shared by the source adapters, the aggregator and the correlator."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceTag(str, Enum):
    SOCIAL = "SOCIAL"
    NEWS = "NEWS"
    CRYPTO = "CRYPTO"


# Display order of sources in every snapshot and payload.
SOURCE_ORDER: Tuple[SourceTag, ...] = (SourceTag.SOCIAL, SourceTag.NEWS, SourceTag.CRYPTO)

# Social placeholder categories (see SocialTrendsAdapter).
DEGRADED_CATEGORIES = frozenset({"notice", "error"})


class TrendItem(BaseModel):
    """One normalized signal from a source."""

    model_config = ConfigDict(frozen=True)

    rank: int = Field(..., ge=1, description="Source-assigned rank, or 1-based list position.")
    label: str = Field(..., min_length=1, description="Topic, story title or coin name.")
    source_tag: SourceTag
    category: str = Field(..., description="Item kind within its source, e.g. 'story', 'coin', 'nft'.")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("label", mode="before")
    @classmethod
    def _strip_label(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @property
    def degraded(self) -> bool:
        return self.category in DEGRADED_CATEGORIES


class Snapshot(BaseModel):
    """Point-in-time result of one aggregation, keyed by source in display order."""

    model_config = ConfigDict(frozen=True)

    items: Dict[SourceTag, Tuple[TrendItem, ...]]
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("items", mode="after")
    @classmethod
    def _order_sources(cls, value: Dict[SourceTag, Tuple[TrendItem, ...]]) -> Dict[SourceTag, Tuple[TrendItem, ...]]:
        return {tag: tuple(value[tag]) for tag in SOURCE_ORDER if tag in value}

    @property
    def source_tags(self) -> Tuple[SourceTag, ...]:
        return tuple(self.items)

    def for_source(self, tag: SourceTag) -> Tuple[TrendItem, ...]:
        return self.items.get(tag, ())

    def coins(self) -> Tuple[TrendItem, ...]:
        return tuple(item for item in self.for_source(SourceTag.CRYPTO) if item.category == "coin")

    def nfts(self) -> Tuple[TrendItem, ...]:
        return tuple(item for item in self.for_source(SourceTag.CRYPTO) if item.category == "nft")


class KeywordRecord(BaseModel):
    """A keyword seen in labels of more than one source."""

    keyword: str
    occurrence_count: int = 0
    sources: List[SourceTag] = Field(default_factory=list)


class KeywordPresence(BaseModel):
    """Which sources mention a caller-supplied keyword."""

    keyword: str
    on_social: bool
    on_news: bool
    on_crypto: bool
