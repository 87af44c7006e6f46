"""Selection coordination across the timeline, network and statistics views.

State lives in one immutable ``SelectionState``. Each incoming event is a
pure transition ``state -> state``; the coordinator applies it, derives
the current paper set and the highlight set, and pushes a ``Snapshot`` to
every subscriber before the next event is admitted.

Merge law (first non-empty wins)::

    network candidates > statistics candidates > timeline candidates > base set

Network and statistics candidates are peers: writing one clears the
other. Writing the timeline (or the global filter) clears both.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Sequence

from filters import NO_FILTER, GlobalFilter, apply_global_filter
from identity import identity_keys, identity_of
from models import Paper, ViewResult
from network_filter import NetworkMode
from timeline_filter import TimelineMode

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SelectionState:
    global_filter: GlobalFilter = NO_FILTER
    base: tuple[Paper, ...] = ()
    # None means the timeline has no local selection and defers to ``base``.
    timeline_candidates: tuple[Paper, ...] | None = None
    network_candidates: tuple[Paper, ...] = ()
    statistics_candidates: tuple[Paper, ...] = ()
    highlighted: tuple[Paper, ...] = ()
    selected_detail: Paper | None = None


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Settled output pushed to every view after an event."""

    current: tuple[Paper, ...]
    highlighted: tuple[Paper, ...]
    detail: Paper | None
    timeline: tuple[Paper, ...]


Listener = Callable[[Snapshot], None]


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------


def timeline_papers(state: SelectionState) -> tuple[Paper, ...]:
    """The timeline-level set: what the network view builds its nodes from."""
    if state.timeline_candidates is not None:
        return state.timeline_candidates
    return state.base


def current_papers(state: SelectionState) -> tuple[Paper, ...]:
    if state.network_candidates:
        return state.network_candidates
    if state.statistics_candidates:
        return state.statistics_candidates
    return timeline_papers(state)


def highlight_set(state: SelectionState) -> tuple[Paper, ...]:
    """Highlighted papers restricted to identifiable members of the current set."""
    current_keys = identity_keys(current_papers(state))
    return tuple(p for p in state.highlighted if identity_of(p) in current_keys)


def detail_list(papers: Iterable[Paper]) -> list[Paper]:
    """Detail pane order: newest first, papers without a year last."""
    return sorted(papers, key=lambda p: (p.year is None, -(p.year or 0)))


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def on_filter_submitted(
    state: SelectionState, corpus: Sequence[Paper], predicate: GlobalFilter
) -> SelectionState:
    base = tuple(apply_global_filter(corpus, predicate))
    return SelectionState(
        global_filter=predicate,
        base=base,
        timeline_candidates=base,
    )


def on_filter_reset(state: SelectionState, corpus: Sequence[Paper]) -> SelectionState:
    return on_filter_submitted(state, corpus, NO_FILTER)


def on_timeline_selected(
    state: SelectionState, mode: TimelineMode, result: ViewResult
) -> SelectionState:
    candidates = None if mode is TimelineMode.NONE else result.candidates
    return replace(
        state,
        timeline_candidates=candidates,
        network_candidates=(),
        statistics_candidates=(),
        highlighted=result.highlight,
        selected_detail=result.detail if result.detail is not None else state.selected_detail,
    )


def on_network_selected(state: SelectionState, result: ViewResult) -> SelectionState:
    # An empty candidate set (e.g. a region release over nothing) clears the
    # network override rather than selecting nothing.
    return replace(
        state,
        network_candidates=result.candidates,
        statistics_candidates=(),
        highlighted=result.highlight,
        selected_detail=result.detail,
    )


def on_category_selected(state: SelectionState, members: Sequence[Paper]) -> SelectionState:
    members = tuple(members)
    return replace(
        state,
        statistics_candidates=members,
        network_candidates=(),
        highlighted=members,
    )


def on_detail_selected(state: SelectionState, paper: Paper) -> SelectionState:
    return replace(state, selected_detail=paper)


def on_detail_cleared(state: SelectionState) -> SelectionState:
    return replace(state, selected_detail=None)


# ---------------------------------------------------------------------------
# Coordinator
# ---------------------------------------------------------------------------


class SelectionCoordinator:
    """Single authority over the selection state.

    Events arriving while subscribers are being notified (for example a view
    reacting to a snapshot by firing its own event) are queued and applied
    in order once the current event has settled.
    """

    def __init__(self, corpus: Sequence[Paper]) -> None:
        self.corpus: tuple[Paper, ...] = tuple(corpus)
        self.state = on_filter_reset(SelectionState(), self.corpus)
        self._listeners: list[Listener] = []
        self._pending: deque[tuple[str, Callable[[SelectionState], SelectionState]]] = deque()
        self._settling = False

    # -- outputs ------------------------------------------------------------

    @property
    def current_papers(self) -> tuple[Paper, ...]:
        return current_papers(self.state)

    @property
    def highlighted(self) -> tuple[Paper, ...]:
        return highlight_set(self.state)

    @property
    def selected_detail(self) -> Paper | None:
        return self.state.selected_detail

    @property
    def timeline_papers(self) -> tuple[Paper, ...]:
        return timeline_papers(self.state)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            current=self.current_papers,
            highlighted=self.highlighted,
            detail=self.selected_detail,
            timeline=self.timeline_papers,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- events -------------------------------------------------------------

    def filter_submitted(self, predicate: GlobalFilter) -> None:
        self._dispatch("filter_submitted", lambda s: on_filter_submitted(s, self.corpus, predicate))

    def filter_reset(self) -> None:
        self._dispatch("filter_reset", lambda s: on_filter_reset(s, self.corpus))

    def timeline_selected(self, mode: TimelineMode, result: ViewResult) -> None:
        self._dispatch("timeline_selected", lambda s: on_timeline_selected(s, mode, result))

    def network_selected(self, mode: NetworkMode, result: ViewResult) -> None:
        self._dispatch(
            f"network_selected:{mode.value}", lambda s: on_network_selected(s, result)
        )

    def category_selected(self, members: Sequence[Paper]) -> None:
        self._dispatch("category_selected", lambda s: on_category_selected(s, members))

    def detail_selected(self, paper: Paper) -> None:
        self._dispatch("detail_selected", lambda s: on_detail_selected(s, paper))

    def detail_cleared(self) -> None:
        self._dispatch("detail_cleared", on_detail_cleared)

    def _dispatch(
        self, event: str, transition: Callable[[SelectionState], SelectionState]
    ) -> None:
        self._pending.append((event, transition))
        if self._settling:
            LOGGER.debug("coordinator: queued event=%s pending=%s", event, len(self._pending))
            return

        self._settling = True
        try:
            while self._pending:
                name, step = self._pending.popleft()
                self.state = step(self.state)
                snapshot = self.snapshot()
                LOGGER.debug(
                    "coordinator: event=%s current=%s highlighted=%s detail=%s",
                    name,
                    len(snapshot.current),
                    len(snapshot.highlighted),
                    identity_of(snapshot.detail) if snapshot.detail else None,
                )
                for listener in list(self._listeners):
                    listener(snapshot)
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._settling = False
