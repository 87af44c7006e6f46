"""Wiring between raw view interactions, the view filters and the coordinator.

Renderers call the interaction methods below with what the user did
(a clicked paper, a pixel span, a rectangle, a bucket) and read back the
settled outputs. Each view is fed the set it depends on:

- timeline: the base set (global filter only)
- network: the timeline-level set
- statistics and the detail list: the current paper set
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from coordinator import SelectionCoordinator, Snapshot, detail_list
from corpus import load_corpus, load_network
from filters import GlobalFilter
from models import AuthorNode, Bucket, CollaborationEdge, CollaborationNetwork, Paper
from network_filter import NetworkFilter, NetworkMode
from spatial_layout import IDENTITY, LayoutCache, Rect, Transform
from statistics_filter import StatisticsFilter
from timeline_filter import TimelineFilter, TimelineMode, YearScale

LOGGER = logging.getLogger(__name__)


class Dashboard:
    def __init__(
        self,
        corpus: Sequence[Paper],
        network: CollaborationNetwork,
        version: str = "default",
        layout_cache: LayoutCache | None = None,
        fallback_threshold: int | None = None,
        seed: int | None = None,
    ) -> None:
        self.coordinator = SelectionCoordinator(corpus)
        self.layout_cache = layout_cache or LayoutCache()
        placement = {} if seed is None else {"seed": seed}
        self.layout = self.layout_cache.layout_for(version, network, **placement)
        self.timeline = TimelineFilter()
        self.network = NetworkFilter(self.layout, fallback_threshold=fallback_threshold)
        self.statistics = StatisticsFilter()
        self.transform: Transform = IDENTITY

    @classmethod
    def from_files(
        cls,
        corpus_path: str | Path,
        network_path: str | Path,
        layout_cache: LayoutCache | None = None,
        **kwargs,
    ) -> Dashboard:
        corpus = load_corpus(corpus_path)
        network = load_network(network_path)
        version = ":".join(
            f"{Path(p).resolve()}@{Path(p).stat().st_mtime_ns}" for p in (corpus_path, network_path)
        )
        return cls(corpus, network, version=version, layout_cache=layout_cache, **kwargs)

    # -- outputs ------------------------------------------------------------

    @property
    def base(self) -> tuple[Paper, ...]:
        return self.coordinator.state.base

    @property
    def current_papers(self) -> tuple[Paper, ...]:
        return self.coordinator.current_papers

    @property
    def highlighted(self) -> tuple[Paper, ...]:
        return self.coordinator.highlighted

    @property
    def detail(self) -> Paper | None:
        return self.coordinator.selected_detail

    def snapshot(self) -> Snapshot:
        return self.coordinator.snapshot()

    def detail_list(self) -> list[Paper]:
        return detail_list(self.current_papers)

    def network_view(self) -> tuple[list[AuthorNode], list[CollaborationEdge]]:
        return self.network.visible(self.coordinator.timeline_papers)

    def category_buckets(self) -> list[Bucket]:
        return self.statistics.buckets(self.current_papers)

    def year_scale(self, left: float, right: float) -> YearScale | None:
        return YearScale.fit(self.timeline.plotted(self.base), left, right)

    # -- global filter ------------------------------------------------------

    def submit_filter(self, predicate: GlobalFilter) -> None:
        self.timeline.reset()
        self.network.focused = frozenset()
        self.coordinator.filter_submitted(predicate)

    def reset_filter(self) -> None:
        self.timeline.reset()
        self.network.focused = frozenset()
        self.coordinator.filter_reset()

    # -- timeline -----------------------------------------------------------

    def click_timeline_point(self, paper: Paper) -> None:
        result = self.timeline.click_point(paper, self.base)
        if result is not None:
            self.coordinator.timeline_selected(self.timeline.mode, result)

    def brush_timeline(self, span: tuple[float, float] | None, scale: YearScale) -> None:
        result = self.timeline.release_brush(span, scale, self.base)
        self.coordinator.timeline_selected(self.timeline.mode, result)

    def select_year_range(self, start: int, end: int) -> None:
        result = self.timeline.select_range(start, end, self.base)
        self.coordinator.timeline_selected(TimelineMode.RANGE, result)

    # -- network ------------------------------------------------------------

    def toggle_network_mode(self) -> NetworkMode:
        return self.network.toggle_mode()

    def set_transform(self, transform: Transform) -> None:
        self.transform = transform

    def click_author(self, node_id: int | str) -> None:
        node = self.layout.node(node_id)
        if node is None:
            LOGGER.warning("dashboard: unknown author node id=%s", node_id)
            return
        result = self.network.click_node(node, self.coordinator.timeline_papers)
        if result is not None:
            self.coordinator.network_selected(NetworkMode.CLICK, result)

    def brush_network(self, rect: Rect | None) -> None:
        result = self.network.release_region(rect, self.coordinator.timeline_papers, self.transform)
        if result is not None:
            self.coordinator.network_selected(NetworkMode.REGION, result)

    def click_collaboration(self, edge: CollaborationEdge) -> None:
        result = self.network.click_edge(edge, self.coordinator.timeline_papers)
        self.coordinator.network_selected(self.network.mode, result)

    # -- statistics ---------------------------------------------------------

    def click_category(self, category: str | int) -> None:
        for bucket in self.category_buckets():
            if bucket.category == category:
                result = self.statistics.click_bucket(bucket)
                self.coordinator.category_selected(result.candidates)
                return
        LOGGER.warning(
            "dashboard: no %s bucket named %r in the current set", self.statistics.chart, category
        )

    # -- detail pane --------------------------------------------------------

    def select_detail(self, paper: Paper) -> None:
        self.coordinator.detail_selected(paper)

    def clear_detail(self) -> None:
        self.coordinator.detail_cleared()
