from models import AuthorNode, CollaborationEdge, CollaborationNetwork, Paper
from network_filter import NetworkFilter, NetworkMode
from spatial_layout import Rect, SpatialLayout, Transform

P_A = Paper(title="A", year=2015, doi="10.1/a", authors=("Ada", "Alan"))
P_B = Paper(title="B", year=2015, paper_id="pid-b", doi="10.1/b", authors=("Alan",))
P_C = Paper(title="C", year=2010, doi="10.1/c", authors=("Grace",))
BASE = [P_A, P_B, P_C]

ADA = AuthorNode(id=1, name="Ada", papers=("10.1/a",), x=100.0, y=100.0)
ALAN = AuthorNode(id=2, name="Alan", papers=("10.1/a", "10.1/b"), x=200.0, y=200.0)
GRACE = AuthorNode(id=3, name="Grace", papers=("10.1/c",), x=800.0, y=800.0)
EDGE_AA = CollaborationEdge(source=ADA, target=ALAN, value=1, papers=("10.1/a",))


def _filter(threshold: int = 100) -> NetworkFilter:
    network = CollaborationNetwork(nodes=(ADA, ALAN, GRACE), edges=(EDGE_AA,))
    return NetworkFilter(SpatialLayout(network), fallback_threshold=threshold)


def _titles(papers) -> list[str]:
    return [p.title for p in papers]


def test_toggle_mode_switches_and_clears_focus() -> None:
    network = _filter()
    network.click_node(ADA, BASE)
    assert network.focused == {1}

    assert network.toggle_mode() is NetworkMode.REGION
    assert network.focused == frozenset()
    assert network.toggle_mode() is NetworkMode.CLICK


def test_click_node_reports_author_papers_within_base() -> None:
    network = _filter()

    result = network.click_node(ALAN, [P_A, P_C])

    assert _titles(result.candidates) == ["A"]
    assert result.highlight == result.candidates
    assert result.detail == P_A
    assert network.focused == {2}


def test_click_node_ignored_in_region_mode() -> None:
    network = _filter()
    network.toggle_mode()
    assert network.click_node(ADA, BASE) is None


def test_region_release_resolves_keys_against_base_only() -> None:
    network = _filter()
    network.toggle_mode()

    result = network.release_region(Rect(50, 50, 250, 250), [P_B, P_C])

    # Ada has no paper in this base set, so only Alan is visible in the box.
    assert _titles(result.candidates) == ["B"]
    assert result.detail == P_B
    assert network.focused == {2}


def test_region_release_uses_inverse_transform() -> None:
    network = _filter()
    network.toggle_mode()

    # Grace sits at (800, 800); at k=0.5 she is drawn at (400, 400).
    result = network.release_region(Rect(390, 390, 410, 410), BASE, Transform(k=0.5))

    assert _titles(result.candidates) == ["C"]


def test_empty_region_release_reports_empty_result() -> None:
    network = _filter()
    network.toggle_mode()

    assert network.release_region(None, BASE).candidates == ()
    assert network.release_region(Rect(5, 5, 5, 30), BASE).candidates == ()


def test_region_release_ignored_in_click_mode() -> None:
    assert _filter().release_region(Rect(0, 0, 10, 10), BASE) is None


def test_click_edge_reports_edge_papers() -> None:
    result = _filter().click_edge(EDGE_AA, BASE)
    assert result.candidates == (P_A,)
    assert result.highlight == (P_A,)
    assert result.detail == P_A


def test_visible_nodes_match_by_author_name_or_paper_key() -> None:
    network = _filter()
    renamed = Paper(title="C2", doi="10.1/c", authors=("G. Hopper",))

    nodes, edges = network.visible([P_B, renamed])

    assert {n.id for n in nodes} == {2, 3}
    assert edges == []


def test_heuristic_fallback_shows_full_network_for_large_unmatched_base() -> None:
    """Heuristic: the threshold is configurable policy, not a strict invariant."""
    unmatched = [Paper(title=f"x{i}", authors=("Nobody",)) for i in range(5)]

    nodes, edges = _filter(threshold=3).visible(unmatched)
    assert {n.id for n in nodes} == {1, 2, 3}
    assert edges == [EDGE_AA]

    nodes, _ = _filter(threshold=10).visible(unmatched)
    assert nodes == []
