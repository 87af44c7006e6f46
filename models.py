"""Shared typed models for the explorer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Paper:
    """Normalized publication record. Never mutated after load."""

    title: str
    year: int | None = None
    conference: str | None = None
    award: str | None = None
    authors: tuple[str, ...] = ()
    abstract: str = ""
    resources: tuple[str, ...] = ()
    link: str = ""
    paper_id: str | None = None
    doi: str | None = None


@dataclass(frozen=True, slots=True)
class AuthorNode:
    """Author in the co-authorship network.

    ``papers`` holds the identity keys (usually DOIs) the author wrote.
    ``x``/``y`` live in data space and are only set by layout placement.
    """

    id: int | str
    name: str | None = None
    papers: tuple[str, ...] = ()
    x: float = 0.0
    y: float = 0.0

    @property
    def label(self) -> str:
        return self.name or str(self.id)


@dataclass(frozen=True, slots=True)
class CollaborationEdge:
    source: AuthorNode
    target: AuthorNode
    value: int = 1
    papers: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CollaborationNetwork:
    nodes: tuple[AuthorNode, ...] = ()
    edges: tuple[CollaborationEdge, ...] = ()


@dataclass(frozen=True, slots=True)
class Bucket:
    """One category of an aggregation, with the papers that fell into it."""

    category: str | int
    count: int
    members: tuple[Paper, ...] = field(default=(), repr=False)


@dataclass(frozen=True, slots=True)
class ViewResult:
    """What a view reports back after an interaction."""

    candidates: tuple[Paper, ...] = ()
    highlight: tuple[Paper, ...] = ()
    detail: Paper | None = None
