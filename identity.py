"""Stable identity for paper records.

Every cross-view comparison (highlight matching, network paper lookup,
candidate resolution) goes through ``identity_of`` so the same record
resolves to the same key for the whole session.
"""

from __future__ import annotations

from typing import Iterable

from models import Paper


def identity_of(paper: Paper) -> str:
    """Return the first non-empty of paper_id, DOI and title, else ""."""
    for value in (paper.paper_id, paper.doi, paper.title):
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def same_entity(a: Paper, b: Paper) -> bool:
    """True iff both papers resolve to the same non-empty key."""
    key = identity_of(a)
    return bool(key) and key == identity_of(b)


def identity_keys(papers: Iterable[Paper]) -> set[str]:
    """Non-empty identity keys of ``papers``. Unidentifiable papers are dropped."""
    return {key for key in (identity_of(p) for p in papers) if key}


def resolve_keys(papers: Iterable[Paper], keys: Iterable[str]) -> list[Paper]:
    """Return the papers (input order) whose identity key or DOI is in ``keys``.

    Network files reference papers by DOI while a paper's identity key may be
    its PaperId, so both are accepted.
    """
    wanted = {k.strip() for k in keys if isinstance(k, str) and k.strip()}
    if not wanted:
        return []

    resolved: list[Paper] = []
    for paper in papers:
        key = identity_of(paper)
        doi = paper.doi.strip() if paper.doi else ""
        if (key and key in wanted) or (doi and doi in wanted):
            resolved.append(paper)
    return resolved
