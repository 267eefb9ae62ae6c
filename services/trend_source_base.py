"""
Common contract for the trend source adapters.

Every adapter fetches one upstream provider and normalizes the response into
:class:`TrendItem` records. What happens when the upstream fails is decided by
one class-level policy flag, ``degrade_on_failure``:

* ``False`` - the failure is raised as :class:`SourceUnavailable`.
* ``True``  - the failure is replaced by a single placeholder item built by
  :meth:`TrendSourceAdapter.degraded_items`; ``fetch()`` never raises.

Subclasses implement :meth:`TrendSourceAdapter._fetch_items` and let any
exception escape; the policy is applied here only.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from app.core.logging import get_logger
from app.models.trends import SourceTag, TrendItem

logger = get_logger().bind(module="trend_source_base")


class SourceUnavailable(Exception):
    """One upstream provider failed or returned unusable data."""

    def __init__(self, source: SourceTag, message: str) -> None:
        super().__init__(f"{source.value}: {message}")
        self.source = source
        self.message = message


class TrendSourceAdapter:
    """
    Base class for one upstream provider.

    Subclasses set ``source_tag``, ``provenance`` and ``degrade_on_failure``
    and must override :meth:`_fetch_items`. Subclasses that set
    ``degrade_on_failure`` must also override :meth:`degraded_items`.
    """

    source_tag: SourceTag
    provenance: str = ""
    degrade_on_failure: bool = False

    async def fetch(self, limit: Optional[int] = None) -> List[TrendItem]:
        try:
            items = await self._fetch_items(limit)
        except SourceUnavailable as exc:
            if self.degrade_on_failure:
                return self._degrade(exc)
            raise
        except Exception as exc:
            if self.degrade_on_failure:
                return self._degrade(exc)
            logger.warning(
                "trend_source_unavailable",
                source=self.source_tag.value,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise SourceUnavailable(self.source_tag, f"{type(exc).__name__}: {exc}") from exc

        if not items and self.degrade_on_failure:
            logger.warning("trend_source_empty", source=self.source_tag.value)
            return self.degraded_items(reason="empty")
        return items

    async def _fetch_items(self, limit: Optional[int]) -> List[TrendItem]:
        raise NotImplementedError

    def degraded_items(self, *, reason: str) -> List[TrendItem]:
        """Placeholder result for adapters with ``degrade_on_failure``."""
        raise NotImplementedError

    def _degrade(self, exc: Exception) -> List[TrendItem]:
        logger.warning(
            "trend_source_degraded",
            source=self.source_tag.value,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return self.degraded_items(reason="error")

    def build_items(self, entries: Iterable[dict[str, Any]]) -> List[TrendItem]:
        """
        Turn raw ``{rank, label, category, metadata}`` dicts into TrendItems,
        dropping entries whose label is missing or blank.
        """
        items: List[TrendItem] = []
        for entry in entries:
            label = entry.get("label")
            if not isinstance(label, str) or not label.strip():
                logger.debug("trend_item_dropped_blank_label", source=self.source_tag.value)
                continue
            items.append(
                TrendItem(
                    rank=entry["rank"],
                    label=label,
                    source_tag=self.source_tag,
                    category=entry["category"],
                    metadata=entry.get("metadata") or {},
                )
            )
        return items
