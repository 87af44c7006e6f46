"""Loading helpers for the publication corpus and the co-authorship network."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from models import AuthorNode, CollaborationEdge, CollaborationNetwork, Paper

LOGGER = logging.getLogger(__name__)

# The source data spells the deduplicated author column this way.
AUTHOR_FIELD = "AuthorNames-Dedpuped"


def load_corpus(path: str | Path) -> list[Paper]:
    """Read a publication corpus JSON file and normalize its records."""
    with Path(path).open(encoding="utf-8") as fh:
        payload = json.load(fh)
    papers = parse_corpus(payload)
    LOGGER.info("corpus: loaded %s papers from %s", len(papers), path)
    return papers


def load_network(path: str | Path) -> CollaborationNetwork:
    """Read a co-authorship network JSON file (unpositioned nodes)."""
    with Path(path).open(encoding="utf-8") as fh:
        payload = json.load(fh)
    network = parse_network(payload)
    LOGGER.info(
        "network: loaded nodes=%s edges=%s from %s",
        len(network.nodes),
        len(network.edges),
        path,
    )
    return network


def parse_corpus(payload: Any) -> list[Paper]:
    """Parse a corpus payload into Paper objects.

    Records with an unparsable year keep ``year=None``; they stay in the
    corpus for identity lookups but drop out of year-based views.
    """
    if not isinstance(payload, list):
        raise RuntimeError("Unexpected corpus payload shape: expected a list")

    papers: list[Paper] = []
    skipped = 0
    missing_year = 0
    for item in payload:
        if not isinstance(item, dict):
            skipped += 1
            continue

        year = parse_year(item.get("Year"))
        if year is None:
            missing_year += 1

        papers.append(
            Paper(
                title=_as_str(item.get("Title")) or "",
                year=year,
                conference=_as_str(item.get("Conference")),
                award=_as_str(item.get("Award")),
                authors=_as_names(item.get(AUTHOR_FIELD, item.get("AuthorNames"))),
                abstract=_as_str(item.get("Abstract")) or "",
                resources=_as_names(item.get("Resources")),
                link=_as_str(item.get("Link")) or "",
                paper_id=_as_str(item.get("PaperId")),
                doi=_as_str(item.get("DOI")),
            )
        )

    if skipped or missing_year:
        LOGGER.info(
            "corpus: skipped_non_records=%s missing_year=%s", skipped, missing_year
        )
    return papers


def parse_network(payload: Any) -> CollaborationNetwork:
    """Parse ``{nodes, links}`` into a network; links with unknown endpoints are dropped."""
    if not isinstance(payload, dict):
        raise RuntimeError("Unexpected network payload shape: expected an object")

    nodes: list[AuthorNode] = []
    for item in payload.get("nodes") or []:
        if not isinstance(item, dict) or item.get("id") is None:
            continue
        nodes.append(
            AuthorNode(
                id=item["id"],
                name=_as_str(item.get("name")),
                papers=_as_paper_keys(item.get("paper")),
            )
        )

    by_id = {node.id: node for node in nodes}
    edges: list[CollaborationEdge] = []
    dropped = 0
    for item in payload.get("links") or []:
        if not isinstance(item, dict):
            dropped += 1
            continue
        source = by_id.get(item.get("source"))
        target = by_id.get(item.get("target"))
        if source is None or target is None:
            dropped += 1
            continue
        edges.append(
            CollaborationEdge(
                source=source,
                target=target,
                value=_as_int(item.get("value"), default=1),
                papers=_as_paper_keys(item.get("papers")),
            )
        )

    if dropped:
        LOGGER.info("network: dropped %s links with unresolved endpoints", dropped)
    return CollaborationNetwork(nodes=tuple(nodes), edges=tuple(edges))


def parse_year(raw: Any) -> int | None:
    """Parse a year given as int or string; anything else is None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        value = raw.strip()
        # Accept leading digits the way a lenient integer parse would ("2015a").
        digits = ""
        for ch in value:
            if not ch.isdigit():
                break
            digits += ch
        return int(digits) if digits else None
    return None


def _as_paper_keys(value: Any) -> tuple[str, ...]:
    """Paper references may be plain keys or embedded paper objects."""
    if not isinstance(value, list):
        value = [value] if value else []

    keys: list[str] = []
    for entry in value:
        if isinstance(entry, dict):
            key = (
                _as_str(entry.get("PaperId"))
                or _as_str(entry.get("DOI"))
                or _as_str(entry.get("Title"))
            )
        else:
            key = _as_str(entry) if not isinstance(entry, (int, float)) else str(entry)
        if key:
            keys.append(key)
    return tuple(keys)


def _as_names(value: Any) -> tuple[str, ...]:
    if isinstance(value, list):
        return tuple(name for name in (_as_str(v) for v in value) if name)
    name = _as_str(value)
    return (name,) if name else ()


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_str(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) and value.strip() else None
