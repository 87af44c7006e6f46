"""Chronological view selection: none, a single year, or a brushed year range."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from models import Paper, ViewResult

LOGGER = logging.getLogger(__name__)


class TimelineMode(Enum):
    NONE = "none"
    SINGLE_POINT = "single_point"
    RANGE = "range"


@dataclass(frozen=True, slots=True)
class TimelineSelection:
    mode: TimelineMode = TimelineMode.NONE
    year: int | None = None
    start: int | None = None
    end: int | None = None

    def accepts(self, paper: Paper) -> bool:
        if self.mode is TimelineMode.NONE:
            return True
        if paper.year is None:
            return False
        if self.mode is TimelineMode.SINGLE_POINT:
            return paper.year == self.year
        return self.start <= paper.year <= self.end


NO_SELECTION = TimelineSelection()


@dataclass(frozen=True, slots=True)
class YearScale:
    """Linear map between years and horizontal pixels on the time axis."""

    start_year: int
    end_year: int
    left: float
    right: float

    @classmethod
    def fit(cls, papers: Iterable[Paper], left: float, right: float) -> YearScale | None:
        """Scale spanning the years present in ``papers``; None when none have a year."""
        years = [p.year for p in papers if p.year is not None]
        if not years:
            return None
        lo, hi = min(years), max(years)
        # A single-year domain or a zero-width axis would collapse the scale;
        # widen either by one unit.
        return cls(lo, hi if hi > lo else lo + 1, left, right if right > left else left + 1)

    def __call__(self, year: float) -> float:
        span = self.end_year - self.start_year
        return self.left + (year - self.start_year) / span * (self.right - self.left)

    def invert(self, px: float) -> int:
        width = self.right - self.left
        year = self.start_year + (px - self.left) / width * (self.end_year - self.start_year)
        return math.floor(year)


class TimelineFilter:
    def __init__(self) -> None:
        self.selection: TimelineSelection = NO_SELECTION

    @property
    def mode(self) -> TimelineMode:
        return self.selection.mode

    def reset(self) -> None:
        self.selection = NO_SELECTION

    def apply(self, base: Iterable[Paper]) -> list[Paper]:
        """Filter the base set by the current selection; NONE passes it through."""
        if self.selection.mode is TimelineMode.NONE:
            return list(base)
        return [p for p in base if self.selection.accepts(p)]

    def plotted(self, base: Iterable[Paper]) -> list[Paper]:
        """Papers the chronological chart can place on its axis."""
        return [p for p in base if p.year is not None]

    def click_point(self, paper: Paper, base: Iterable[Paper]) -> ViewResult | None:
        if paper.year is None:
            LOGGER.debug("timeline: ignoring click on paper without a year: %s", paper.title)
            return None
        self.selection = TimelineSelection(mode=TimelineMode.SINGLE_POINT, year=paper.year)
        return ViewResult(
            candidates=tuple(self.apply(base)),
            highlight=(paper,),
            detail=paper,
        )

    def release_brush(
        self,
        span: tuple[float, float] | None,
        scale: YearScale,
        base: Iterable[Paper],
    ) -> ViewResult:
        """Finish a drag on the time axis; an empty pixel span clears the selection."""
        if span is None or span[0] == span[1]:
            self.selection = NO_SELECTION
            return ViewResult(candidates=tuple(self.apply(base)))
        x0, x1 = sorted(span)
        return self.select_range(scale.invert(x0), scale.invert(x1), base)

    def select_range(self, start: int, end: int, base: Iterable[Paper]) -> ViewResult:
        start, end = sorted((start, end))
        self.selection = TimelineSelection(mode=TimelineMode.RANGE, start=start, end=end)
        return ViewResult(candidates=tuple(self.apply(base)))
