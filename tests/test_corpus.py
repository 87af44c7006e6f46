import json
from pathlib import Path

import pytest

from corpus import load_corpus, load_network, parse_corpus, parse_network, parse_year


def test_parse_corpus_normalizes_fields() -> None:
    payload = [
        {
            "Title": " Paper A ",
            "Year": "2015",
            "Conference": "VIS",
            "Award": "",
            "AuthorNames-Dedpuped": "Ada Lovelace",
            "Abstract": "abs",
            "Resources": ["code", "data"],
            "Link": "https://example.com/a",
            "DOI": "10.1/a",
        }
    ]

    papers = parse_corpus(payload)

    assert len(papers) == 1
    paper = papers[0]
    assert paper.title == "Paper A"
    assert paper.year == 2015
    assert paper.conference == "VIS"
    assert paper.award is None
    assert paper.authors == ("Ada Lovelace",)
    assert paper.resources == ("code", "data")
    assert paper.doi == "10.1/a"
    assert paper.paper_id is None


def test_parse_corpus_keeps_records_with_bad_year() -> None:
    papers = parse_corpus([{"Title": "No year", "Year": "n/a"}, "junk", 3])
    assert len(papers) == 1
    assert papers[0].year is None


def test_parse_corpus_rejects_non_list_payload() -> None:
    with pytest.raises(RuntimeError):
        parse_corpus({"Title": "x"})


@pytest.mark.parametrize("raw, expected", [
    (2015, 2015),
    ("2015", 2015),
    (" 1999 ", 1999),
    ("2010a", 2010),
    (2012.0, 2012),
    ("", None),
    ("abc", None),
    (None, None),
    (True, None),
])
def test_parse_year(raw, expected) -> None:
    assert parse_year(raw) == expected


def test_parse_network_resolves_links_and_drops_dangling() -> None:
    payload = {
        "nodes": [
            {"id": 1, "name": "Ada", "paper": ["10.1/a"]},
            {"id": 2, "paper": ["10.1/a", "10.1/b"]},
        ],
        "links": [
            {"source": 1, "target": 2, "value": 3, "papers": ["10.1/a", {"DOI": "10.1/b"}]},
            {"source": 1, "target": 99, "value": 1},
        ],
    }

    network = parse_network(payload)

    assert [n.id for n in network.nodes] == [1, 2]
    assert network.nodes[1].label == "2"
    assert len(network.edges) == 1
    edge = network.edges[0]
    assert edge.source is network.nodes[0]
    assert edge.target is network.nodes[1]
    assert edge.value == 3
    assert edge.papers == ("10.1/a", "10.1/b")


def test_parse_network_edge_without_papers() -> None:
    network = parse_network({"nodes": [{"id": "a"}, {"id": "b"}], "links": [{"source": "a", "target": "b"}]})
    assert network.edges[0].papers == ()
    assert network.edges[0].value == 1


def test_load_files_roundtrip(tmp_path: Path) -> None:
    corpus_path = tmp_path / "corpus.json"
    network_path = tmp_path / "network.json"
    corpus_path.write_text(json.dumps([{"Title": "T", "Year": 2001}]), encoding="utf-8")
    network_path.write_text(json.dumps({"nodes": [{"id": 1}], "links": []}), encoding="utf-8")

    assert load_corpus(corpus_path)[0].year == 2001
    assert len(load_network(network_path).nodes) == 1
