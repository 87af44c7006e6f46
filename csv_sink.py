"""CSV export of the current paper set, in detail-list order."""

from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import Iterable

from coordinator import detail_list
from identity import identity_keys, identity_of
from models import Paper

CURRENT_SET_CSV_PATH = os.getenv("CURRENT_SET_CSV_PATH", "current_papers.csv")

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "identity_key",
    "title",
    "year",
    "conference",
    "award",
    "authors",      # "; "-joined
    "resources",    # "; "-joined
    "link",
    "highlighted",  # True if the paper is in the highlight set
]


def paper_row(paper: Paper, highlighted_keys: set[str]) -> dict[str, object]:
    key = identity_of(paper)
    return {
        "identity_key": key,
        "title": paper.title,
        "year": "" if paper.year is None else paper.year,
        "conference": paper.conference or "",
        "award": paper.award or "",
        "authors": "; ".join(paper.authors),
        "resources": "; ".join(paper.resources),
        "link": paper.link,
        "highlighted": bool(key) and key in highlighted_keys,
    }


def write_paper_set(
    papers: Iterable[Paper],
    highlighted: Iterable[Paper] = (),
    csv_path: str | None = None,
) -> int:
    """Overwrite the CSV with ``papers`` (newest first). Returns the row count."""
    path = Path(csv_path or CURRENT_SET_CSV_PATH)
    highlighted_keys = identity_keys(highlighted)
    rows = [paper_row(p, highlighted_keys) for p in detail_list(papers)]

    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)

    LOGGER.info("Wrote %s paper rows to %s", len(rows), path)
    return len(rows)
