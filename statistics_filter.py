"""Categorical statistics view: top-N buckets per field and bucket clicks."""

from __future__ import annotations

import os
from typing import Iterable

from aggregator import top_buckets
from models import Bucket, Paper, ViewResult

STATISTICS_TOP_N = int(os.getenv("STATISTICS_TOP_N", "10"))

# chart name -> corpus field
STATISTICS_FIELDS: dict[str, str] = {
    "conference": "Conference",
    "award": "Award",
    "resources": "Resources",
}


class StatisticsFilter:
    """Holds which chart is shown; never remembers a selected bucket."""

    def __init__(self, chart: str = "conference", top_n: int | None = None) -> None:
        self.top_n = STATISTICS_TOP_N if top_n is None else top_n
        self.chart = chart
        self.set_chart(chart)

    @property
    def field(self) -> str:
        return STATISTICS_FIELDS[self.chart]

    def set_chart(self, chart: str) -> None:
        if chart not in STATISTICS_FIELDS:
            raise ValueError(f"unknown statistics chart: {chart!r}")
        self.chart = chart

    def buckets(self, papers: Iterable[Paper]) -> list[Bucket]:
        return top_buckets(papers, self.field, self.top_n)

    def click_bucket(self, bucket: Bucket) -> ViewResult:
        return ViewResult(candidates=bucket.members, highlight=bucket.members)
