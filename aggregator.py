"""Categorical aggregation over paper sets."""

from __future__ import annotations

from typing import Any, Iterable

from models import Bucket, Paper

# Raw corpus column names accepted as aliases for Paper attributes.
FIELD_ALIASES: dict[str, str] = {
    "Title": "title",
    "Year": "year",
    "Conference": "conference",
    "Award": "award",
    "Resources": "resources",
    "AuthorNames-Dedpuped": "authors",
    "AuthorNames": "authors",
}

LIST_SEPARATOR = ", "


def aggregate(papers: Iterable[Paper], field: str) -> list[Bucket]:
    """Group papers by ``field`` into buckets sorted by count, largest first.

    A list value is joined into one composite label, so a co-tagged paper
    counts once. Papers with an absent or empty value are left out. Ties
    keep first-seen order.
    """
    attr = FIELD_ALIASES.get(field, field)
    groups: dict[Any, list[Paper]] = {}
    for paper in papers:
        category = _category_of(getattr(paper, attr, None))
        if category is None:
            continue
        groups.setdefault(category, []).append(paper)

    buckets = [
        Bucket(category=category, count=len(members), members=tuple(members))
        for category, members in groups.items()
    ]
    # sorted() is stable, so equal counts stay in insertion (first-seen) order.
    return sorted(buckets, key=lambda b: b.count, reverse=True)


def top_buckets(papers: Iterable[Paper], field: str, n: int | None) -> list[Bucket]:
    """Aggregate the full input, then keep the ``n`` largest buckets."""
    buckets = aggregate(papers, field)
    if n is None:
        return buckets
    return buckets[: max(n, 0)]


def year_histogram(papers: Iterable[Paper]) -> list[tuple[int, int]]:
    """Return ``(year, count)`` pairs ascending by year; papers without a year are skipped."""
    counts: dict[int, int] = {}
    for paper in papers:
        if paper.year is None:
            continue
        counts[paper.year] = counts.get(paper.year, 0) + 1
    return sorted(counts.items())


def _category_of(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [str(v).strip() for v in value if v is not None and str(v).strip()]
        return LIST_SEPARATOR.join(parts) if parts else None
    if isinstance(value, str):
        return value.strip() or None
    return value
