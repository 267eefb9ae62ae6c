from __future__ import annotations

import pytest

from app.models.trends import SourceTag
from services.trend_source_base import SourceUnavailable, TrendSourceAdapter


class BareNewsAdapter(TrendSourceAdapter):
    source_tag = SourceTag.NEWS


class BareSocialAdapter(TrendSourceAdapter):
    source_tag = SourceTag.SOCIAL
    degrade_on_failure = True

    async def _fetch_items(self, limit):
        raise RuntimeError("blocked")


@pytest.mark.asyncio
async def test_adapter_without_fetch_items_is_unavailable():
    with pytest.raises(SourceUnavailable) as exc:
        await BareNewsAdapter().fetch()

    assert exc.value.source is SourceTag.NEWS
    assert isinstance(exc.value.__cause__, NotImplementedError)


@pytest.mark.asyncio
async def test_degrading_adapter_must_provide_placeholder():
    with pytest.raises(NotImplementedError):
        await BareSocialAdapter().fetch()


def test_build_items_drops_blank_labels():
    items = BareNewsAdapter().build_items(
        [
            {"rank": 1, "label": "  Kept story  ", "category": "story"},
            {"rank": 2, "label": "   ", "category": "story"},
            {"rank": 3, "label": None, "category": "story"},
        ]
    )

    assert [(item.rank, item.label) for item in items] == [(1, "Kept story")]
    assert items[0].metadata == {}
