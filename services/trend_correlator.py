"""
Cross-platform keyword correlation over a :class:`Snapshot`.

Tokenization differs per source on purpose:

* SOCIAL - the whole trend label is one token (trends are short phrases),
* NEWS   - story titles are split on whitespace,
* CRYPTO - each coin name is one token (NFTs are ignored).

So ``"bitcoin rally"`` on X never matches ``"bitcoin"`` on CoinGecko.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from app.models.trends import SOURCE_ORDER, KeywordRecord, Snapshot, SourceTag

MIN_KEYWORD_LENGTH = 3
CROSS_PLATFORM_LIMIT = 10
SUMMARY_TOP_N = 5


class TrendSummary(BaseModel):
    """First N labels per source, untokenized."""

    top_social: List[str] = Field(default_factory=list)
    top_news: List[str] = Field(default_factory=list)
    top_crypto: List[str] = Field(default_factory=list)


def tokenize_snapshot(snapshot: Snapshot) -> Dict[SourceTag, List[str]]:
    """Token list per source, duplicates kept, in snapshot order."""
    return {
        SourceTag.SOCIAL: [item.label.lower() for item in snapshot.for_source(SourceTag.SOCIAL)],
        SourceTag.NEWS: [
            token
            for item in snapshot.for_source(SourceTag.NEWS)
            for token in item.label.lower().split()
        ],
        SourceTag.CRYPTO: [item.label.lower() for item in snapshot.coins()],
    }


def correlate(snapshot: Snapshot, *, limit: int = CROSS_PLATFORM_LIMIT) -> List[KeywordRecord]:
    tokens_by_source = tokenize_snapshot(snapshot)
    distinct_by_source = {tag: set(tokens) for tag, tokens in tokens_by_source.items()}

    records: Dict[str, KeywordRecord] = {}
    for tag in SOURCE_ORDER:
        for token in tokens_by_source[tag]:
            if len(token) < MIN_KEYWORD_LENGTH:
                continue
            record = records.get(token)
            if record is None:
                record = records[token] = KeywordRecord(keyword=token)
            record.occurrence_count += 1
            for source in SOURCE_ORDER:
                if token in distinct_by_source[source] and source not in record.sources:
                    record.sources.append(source)

    cross_platform = [record for record in records.values() if len(record.sources) > 1]
    # sorted() is stable: ties keep first-occurrence order
    cross_platform = sorted(
        cross_platform,
        key=lambda record: (len(record.sources), record.occurrence_count),
        reverse=True,
    )
    return cross_platform[:limit]


def summarize(snapshot: Snapshot, *, top_n: int = SUMMARY_TOP_N) -> TrendSummary:
    return TrendSummary(
        top_social=[item.label for item in snapshot.for_source(SourceTag.SOCIAL)[:top_n]],
        top_news=[item.label for item in snapshot.for_source(SourceTag.NEWS)[:top_n]],
        top_crypto=[_coin_display(item.label, item.metadata.get("symbol")) for item in snapshot.coins()[:top_n]],
    )


def _coin_display(name: str, symbol: object) -> str:
    return f"{name} ({symbol})" if symbol else name

