"""Co-authorship network view selection: node clicks, region brushes, edge clicks."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Sequence

from identity import identity_keys, resolve_keys
from models import AuthorNode, CollaborationEdge, Paper, ViewResult
from spatial_layout import IDENTITY, Rect, SpatialLayout, Transform

# Heuristic: a large base set that maps to zero nodes most likely means the
# author names in the two data files disagree, not that nothing matches.
NETWORK_FALLBACK_THRESHOLD = int(os.getenv("NETWORK_FALLBACK_THRESHOLD", "100"))

LOGGER = logging.getLogger(__name__)


class NetworkMode(Enum):
    CLICK = "click"
    REGION = "region"


class NetworkFilter:
    def __init__(
        self,
        layout: SpatialLayout,
        fallback_threshold: int | None = None,
    ) -> None:
        self.layout = layout
        self.fallback_threshold = (
            NETWORK_FALLBACK_THRESHOLD if fallback_threshold is None else fallback_threshold
        )
        self.mode = NetworkMode.CLICK
        self.focused: frozenset[int | str] = frozenset()

    def toggle_mode(self) -> NetworkMode:
        """Switch between click-select and region-select; decorations are cleared."""
        self.mode = NetworkMode.REGION if self.mode is NetworkMode.CLICK else NetworkMode.CLICK
        self.focused = frozenset()
        LOGGER.debug("network: mode=%s", self.mode.value)
        return self.mode

    def _matched_nodes(self, base: Sequence[Paper]) -> list[AuthorNode]:
        authors = {name.strip() for p in base for name in p.authors if name.strip()}
        keys = identity_keys(base) | {p.doi.strip() for p in base if p.doi and p.doi.strip()}
        return [
            node
            for node in self.layout.nodes
            if node.label.strip() in authors or any(key in keys for key in node.papers)
        ]

    def _falls_back(self, matched: list[AuthorNode], base: Sequence[Paper]) -> bool:
        if matched or len(base) <= self.fallback_threshold:
            return False
        LOGGER.info("network: no node matched %s papers, showing the full network", len(base))
        return True

    def visible_nodes(self, base: Sequence[Paper]) -> list[AuthorNode]:
        nodes = self._matched_nodes(base)
        if self._falls_back(nodes, base):
            return list(self.layout.nodes)
        return nodes

    def visible(self, base: Sequence[Paper]) -> tuple[list[AuthorNode], list[CollaborationEdge]]:
        """Nodes and edges to draw for the given base set.

        The fallback shows the whole network, edges included, unfiltered.
        """
        nodes = self._matched_nodes(base)
        if self._falls_back(nodes, base):
            return list(self.layout.nodes), list(self.layout.edges)
        return nodes, self.layout.visible_edges(nodes, base)

    def click_node(self, node: AuthorNode, base: Sequence[Paper]) -> ViewResult | None:
        if self.mode is not NetworkMode.CLICK:
            LOGGER.debug("network: node click ignored in %s mode", self.mode.value)
            return None

        papers = tuple(resolve_keys(base, node.papers))
        self.focused = frozenset({node.id})
        return ViewResult(
            candidates=papers,
            highlight=papers,
            detail=papers[0] if papers else None,
        )

    def release_region(
        self,
        rect: Rect | None,
        base: Sequence[Paper],
        transform: Transform = IDENTITY,
    ) -> ViewResult | None:
        """Finish a rectangle drag. An empty release yields an empty result,
        which the coordinator reads as clearing the network selection."""
        if self.mode is not NetworkMode.REGION:
            LOGGER.debug("network: region release ignored in %s mode", self.mode.value)
            return None

        if rect is None or rect.is_empty:
            self.focused = frozenset()
            return ViewResult()

        visible_ids = [node.id for node in self.visible_nodes(base)]
        selected = self.layout.nodes_in_rect(rect, transform, among=visible_ids)
        keys = [key for node in selected for key in node.papers]
        papers = tuple(resolve_keys(base, keys))
        self.focused = frozenset(node.id for node in selected)
        LOGGER.debug(
            "network: region nodes=%s papers=%s transform=%s", len(selected), len(papers), transform
        )
        return ViewResult(
            candidates=papers,
            highlight=papers,
            detail=papers[0] if papers else None,
        )

    def click_edge(self, edge: CollaborationEdge, base: Sequence[Paper]) -> ViewResult:
        papers = tuple(resolve_keys(base, edge.papers))
        return ViewResult(
            candidates=papers,
            highlight=papers,
            detail=papers[0] if papers else None,
        )
