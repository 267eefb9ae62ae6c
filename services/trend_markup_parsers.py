"""
Topic extraction strategies for the social trends page.

The page markup belongs to a third party and changes without notice, so the
extraction lives behind :class:`TrendMarkupParser`. ``SocialTrendsAdapter``
only ever calls ``parse(html)`` and receives topic labels in page order.

Available strategies (select with ``SOCIAL_TRENDS_PARSER``):

* ``pattern`` - :class:`PatternTrendParser`, a regular expression over the
  raw markup that takes the text directly following a
  ``data-testid="trend"`` opening tag.
* ``soup``    - :class:`SoupTrendParser`, BeautifulSoup selection of the
  same elements, reading their full text content.
"""

from __future__ import annotations

import re
from typing import Dict, List, Type

from bs4 import BeautifulSoup


class TrendMarkupParser:
    name: str = ""

    def parse(self, html: str) -> List[str]:
        """Return topic labels in page order; blank labels are skipped."""
        raise NotImplementedError


class PatternTrendParser(TrendMarkupParser):
    name = "pattern"

    _TREND_RE = re.compile(r'data-testid="trend"[^>]*>([^<]+)')

    def parse(self, html: str) -> List[str]:
        labels: List[str] = []
        for match in self._TREND_RE.finditer(html or ""):
            label = match.group(1).strip()
            if label:
                labels.append(label)
        return labels


class SoupTrendParser(TrendMarkupParser):
    name = "soup"

    def parse(self, html: str) -> List[str]:
        soup = BeautifulSoup(html or "", "html.parser")
        labels: List[str] = []
        for element in soup.select('[data-testid="trend"]'):
            label = element.get_text(" ", strip=True)
            if label:
                labels.append(label)
        return labels


_PARSERS: Dict[str, Type[TrendMarkupParser]] = {
    PatternTrendParser.name: PatternTrendParser,
    SoupTrendParser.name: SoupTrendParser,
}


def get_markup_parser(name: str) -> TrendMarkupParser:
    try:
        return _PARSERS[name.strip().lower()]()
    except KeyError:
        raise ValueError(f"Unknown trend markup parser {name!r}; expected one of {sorted(_PARSERS)}") from None
