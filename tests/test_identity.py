import pytest

from identity import identity_keys, identity_of, resolve_keys, same_entity
from models import Paper


def _paper(title: str = "", paper_id: str | None = None, doi: str | None = None) -> Paper:
    return Paper(title=title, paper_id=paper_id, doi=doi)


@pytest.mark.parametrize("paper, expected", [
    (_paper("Title", paper_id="p1", doi="10.1/x"), "p1"),
    (_paper("Title", doi="10.1/x"), "10.1/x"),
    (_paper("Title"), "Title"),
    (_paper("Title", paper_id="   ", doi=""), "Title"),
    (_paper(""), ""),
])
def test_identity_of_priority_order(paper: Paper, expected: str) -> None:
    assert identity_of(paper) == expected


def test_same_entity_is_reflexive_for_identifiable_papers() -> None:
    paper = _paper("A", doi="10.1/a")
    assert same_entity(paper, paper) is True


def test_same_entity_never_matches_unidentifiable_papers() -> None:
    blank = _paper("")
    assert same_entity(blank, blank) is False
    assert same_entity(blank, _paper("")) is False


def test_same_entity_is_symmetric() -> None:
    a = _paper("Shared title")
    b = _paper("Shared title", doi=None)
    c = _paper("Other", doi="10.1/c")
    for x, y in [(a, b), (a, c), (b, c)]:
        assert same_entity(x, y) == same_entity(y, x)
    assert same_entity(a, b) is True


def test_identity_collision_is_treated_as_same_entity() -> None:
    a = Paper(title="Same", year=2010)
    b = Paper(title="Same", year=2020)
    assert same_entity(a, b) is True


def test_identity_keys_drops_empty_keys() -> None:
    assert identity_keys([_paper("A"), _paper(""), _paper("B", doi="d")]) == {"A", "d"}


def test_resolve_keys_matches_identity_or_doi_in_input_order() -> None:
    p1 = _paper("One", paper_id="id-1", doi="10.1/one")
    p2 = _paper("Two", doi="10.1/two")
    p3 = _paper("Three")

    resolved = resolve_keys([p1, p2, p3], ["10.1/two", "10.1/one"])

    assert resolved == [p1, p2]


def test_resolve_keys_ignores_empty_keys() -> None:
    assert resolve_keys([_paper("")], ["", "  "]) == []
