from __future__ import annotations

from typing import List, Optional, Sequence

from app.models.trends import KeywordPresence, Snapshot, SourceTag


def filter_by_keywords(snapshot: Snapshot, keywords: Sequence[str]) -> Optional[List[KeywordPresence]]:
    """
    Case-insensitive substring presence of each keyword per source.

    Matches social labels, news titles, and crypto coin names or symbols.
    Unlike the correlator this does not tokenize, so a multi-word keyword can
    match here. Returns ``None`` when *keywords* is empty.
    """
    if not keywords:
        return None

    social = [item.label.lower() for item in snapshot.for_source(SourceTag.SOCIAL)]
    news = [item.label.lower() for item in snapshot.for_source(SourceTag.NEWS)]
    coins = [
        (item.label.lower(), str(item.metadata.get("symbol") or "").lower())
        for item in snapshot.coins()
    ]

    rows: List[KeywordPresence] = []
    for keyword in keywords:
        needle = keyword.lower()
        rows.append(
            KeywordPresence(
                keyword=keyword,
                on_social=any(needle in label for label in social),
                on_news=any(needle in title for title in news),
                on_crypto=any(needle in name or needle in symbol for name, symbol in coins),
            )
        )
    return rows
