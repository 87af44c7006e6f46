"""Global filter bar predicate (text, year and category fields)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from models import Paper


@dataclass(frozen=True, slots=True)
class GlobalFilter:
    """Predicate submitted from the filter bar.

    Text fields match case-insensitive substrings; unset fields match
    everything. Year bounds are inclusive and exclude papers without a
    year only when a bound is set.
    """

    title: str | None = None
    author: str | None = None
    conference: str | None = None
    award: str | None = None
    start_year: int | None = None
    end_year: int | None = None

    @property
    def is_empty(self) -> bool:
        return not any((
            self.title,
            self.author,
            self.conference,
            self.award,
            self.start_year,
            self.end_year,
        ))

    def matches(self, paper: Paper) -> bool:
        if self.title and not _contains(paper.title, self.title):
            return False
        if self.conference and not _contains(paper.conference, self.conference):
            return False
        if self.award and not _contains(paper.award, self.award):
            return False
        if self.author and not any(_contains(a, self.author) for a in paper.authors):
            return False

        if self.start_year or self.end_year:
            if paper.year is None:
                return False
            if self.start_year and paper.year < self.start_year:
                return False
            if self.end_year and paper.year > self.end_year:
                return False

        return True


NO_FILTER = GlobalFilter()


def apply_global_filter(papers: Iterable[Paper], predicate: GlobalFilter | None) -> list[Paper]:
    """Return a new list of the papers matching ``predicate`` (input order)."""
    if predicate is None or predicate.is_empty:
        return list(papers)
    return [p for p in papers if predicate.matches(p)]


def _contains(value: str | None, needle: str) -> bool:
    return bool(value) and needle.strip().lower() in value.lower()
