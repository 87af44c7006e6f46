"""Fixed node layout for the co-authorship network and screen-space queries.

Node coordinates live in data space and are assigned once per corpus load.
Panning and zooming only change the viewing ``Transform``; a brush drawn
in screen space is mapped back into data space by inverting the
transform on the rectangle's corners.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, replace
from typing import Collection, Iterable

import numpy as np

from identity import identity_of
from models import AuthorNode, CollaborationEdge, CollaborationNetwork, Paper

CANVAS_SIZE = float(os.getenv("CANVAS_SIZE", "1600"))
CANVAS_MARGIN = float(os.getenv("CANVAS_MARGIN", "100"))
_SEED_RAW = os.getenv("LAYOUT_SEED")
LAYOUT_SEED = int(_SEED_RAW) if _SEED_RAW else None
ZOOM_SCALE_EXTENT = (0.1, 8.0)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Transform:
    """Pan + uniform scale: ``screen = data * k + (x, y)``."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.k) or self.k <= 0:
            raise ValueError(f"transform scale must be positive and finite, got k={self.k}")

    def apply(self, px: float, py: float) -> tuple[float, float]:
        return px * self.k + self.x, py * self.k + self.y

    def invert(self, px: float, py: float) -> tuple[float, float]:
        return (px - self.x) / self.k, (py - self.y) / self.k

    def inverse(self) -> Transform:
        return Transform(k=1.0 / self.k, x=-self.x / self.k, y=-self.y / self.k)

    def compose(self, other: Transform) -> Transform:
        """Transform that applies ``other`` first, then ``self``."""
        return Transform(
            k=self.k * other.k,
            x=self.k * other.x + self.x,
            y=self.k * other.y + self.y,
        )

    def panned(self, dx: float, dy: float) -> Transform:
        return Transform(k=self.k, x=self.x + dx, y=self.y + dy)

    def zoomed(self, factor: float, cx: float = 0.0, cy: float = 0.0) -> Transform:
        """Scale by ``factor`` around screen point (cx, cy), clamped to the zoom extent."""
        lo, hi = ZOOM_SCALE_EXTENT
        k = min(max(self.k * factor, lo), hi)
        # Keep the data point under (cx, cy) fixed on screen.
        dx, dy = self.invert(cx, cy)
        return Transform(k=k, x=cx - dx * k, y=cy - dy * k)


IDENTITY = Transform()


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle; corners are normalized on construction."""

    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        x0, x1 = sorted((self.x0, self.x1))
        y0, y1 = sorted((self.y0, self.y1))
        object.__setattr__(self, "x0", x0)
        object.__setattr__(self, "x1", x1)
        object.__setattr__(self, "y0", y0)
        object.__setattr__(self, "y1", y1)

    @property
    def is_empty(self) -> bool:
        return self.x0 == self.x1 or self.y0 == self.y1

    def contains(self, px: float, py: float) -> bool:
        return self.x0 <= px <= self.x1 and self.y0 <= py <= self.y1

    def to_data_space(self, transform: Transform) -> Rect:
        x0, y0 = transform.invert(self.x0, self.y0)
        x1, y1 = transform.invert(self.x1, self.y1)
        return Rect(x0, y0, x1, y1)


def assign_positions(
    count: int,
    canvas_size: float = CANVAS_SIZE,
    margin: float = CANVAS_MARGIN,
    seed: int | None = LAYOUT_SEED,
) -> np.ndarray:
    """Return ``count`` independent uniform positions inside the inset canvas."""
    if margin * 2 >= canvas_size:
        raise ValueError(f"margin {margin} leaves no room on a {canvas_size} canvas")
    rng = np.random.default_rng(seed)
    return rng.uniform(margin, canvas_size - margin, size=(count, 2))


class SpatialLayout:
    """Positioned network plus containment queries under a viewing transform."""

    def __init__(self, network: CollaborationNetwork) -> None:
        self.network = network
        self.nodes: tuple[AuthorNode, ...] = network.nodes
        self.edges: tuple[CollaborationEdge, ...] = network.edges
        self._by_id = {node.id: node for node in self.nodes}
        self._coords = np.array(
            [(node.x, node.y) for node in self.nodes], dtype=float
        ).reshape(len(self.nodes), 2)

    @classmethod
    def place(
        cls,
        network: CollaborationNetwork,
        canvas_size: float = CANVAS_SIZE,
        margin: float = CANVAS_MARGIN,
        seed: int | None = LAYOUT_SEED,
    ) -> SpatialLayout:
        """Assign fresh positions to every node and rebind edges to the placed nodes."""
        coords = assign_positions(len(network.nodes), canvas_size, margin, seed)
        placed = {
            node.id: replace(node, x=float(x), y=float(y))
            for node, (x, y) in zip(network.nodes, coords)
        }
        edges = tuple(
            replace(edge, source=placed[edge.source.id], target=placed[edge.target.id])
            for edge in network.edges
        )
        LOGGER.info(
            "layout: placed nodes=%s on canvas=%s margin=%s seed=%s",
            len(placed),
            canvas_size,
            margin,
            seed,
        )
        return cls(CollaborationNetwork(nodes=tuple(placed.values()), edges=edges))

    def node(self, node_id: int | str) -> AuthorNode | None:
        return self._by_id.get(node_id)

    def nodes_in_rect(
        self,
        rect: Rect,
        transform: Transform = IDENTITY,
        among: Collection[int | str] | None = None,
    ) -> list[AuthorNode]:
        """Nodes whose data-space position lies inside the screen-space ``rect``.

        Boundaries are inclusive. ``among`` restricts the result to the given
        node ids (the currently visible ones).
        """
        if not self.nodes:
            return []
        box = rect.to_data_space(transform)
        xs = self._coords[:, 0]
        ys = self._coords[:, 1]
        mask = (xs >= box.x0) & (xs <= box.x1) & (ys >= box.y0) & (ys <= box.y1)
        hits = [self.nodes[i] for i in np.flatnonzero(mask)]
        if among is not None:
            allowed = set(among)
            hits = [node for node in hits if node.id in allowed]
        return hits

    def visible_edges(
        self,
        visible_nodes: Iterable[AuthorNode],
        current_papers: Iterable[Paper],
    ) -> list[CollaborationEdge]:
        """Edges whose endpoints are both visible and, when they list papers,
        that share at least one paper with the current set."""
        visible_ids = {node.id for node in visible_nodes}
        current_keys: set[str] = set()
        for paper in current_papers:
            key = identity_of(paper)
            if key:
                current_keys.add(key)
            if paper.doi:
                current_keys.add(paper.doi.strip())

        edges: list[CollaborationEdge] = []
        for edge in self.edges:
            if edge.source.id not in visible_ids or edge.target.id not in visible_ids:
                continue
            if edge.papers and not any(key in current_keys for key in edge.papers):
                continue
            edges.append(edge)
        return edges


class LayoutCache:
    """Memoizes one layout per corpus version so positions survive filtering."""

    def __init__(self) -> None:
        self._version: str | None = None
        self._layout: SpatialLayout | None = None

    @property
    def version(self) -> str | None:
        return self._version

    def layout_for(
        self,
        version: str,
        network: CollaborationNetwork,
        canvas_size: float = CANVAS_SIZE,
        margin: float = CANVAS_MARGIN,
        seed: int | None = LAYOUT_SEED,
    ) -> SpatialLayout:
        if self._layout is not None and self._version == version:
            return self._layout

        LOGGER.info("layout: building layout for corpus version=%s", version)
        self._layout = SpatialLayout.place(network, canvas_size, margin, seed)
        self._version = version
        return self._layout
