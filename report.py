"""Category summary report for a paper set.

One CSV, one block per statistics chart plus a per-year block:

  section     : conference | award | resources | year
  rank        : 1-based position inside the section
  category    : bucket label (or the year)
  count       : papers in the bucket

Buckets are computed over the whole set before the top-N cut, exactly as
the statistics view does. Runnable standalone:
    python report.py data/vispubs.json
"""

from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import Iterable

from aggregator import top_buckets, year_histogram
from models import Paper
from statistics_filter import STATISTICS_FIELDS, STATISTICS_TOP_N

LOGGER = logging.getLogger(__name__)

CATEGORY_REPORT_PATH = os.getenv("CATEGORY_REPORT_PATH", "category_report.csv")

REPORT_COLUMNS = ["section", "rank", "category", "count"]


def build_report_rows(papers: Iterable[Paper], top_n: int | None = None) -> list[dict]:
    papers = list(papers)
    limit = STATISTICS_TOP_N if top_n is None else top_n

    rows: list[dict] = []
    for section, field in STATISTICS_FIELDS.items():
        for rank, bucket in enumerate(top_buckets(papers, field, limit), 1):
            rows.append({
                "section": section,
                "rank": rank,
                "category": bucket.category,
                "count": bucket.count,
            })

    for rank, (year, count) in enumerate(year_histogram(papers), 1):
        rows.append({"section": "year", "rank": rank, "category": year, "count": count})
    return rows


def generate_category_report(
    papers: Iterable[Paper],
    report_path: str | None = None,
    top_n: int | None = None,
) -> int:
    """Write the category report; returns the number of rows written."""
    rows = build_report_rows(papers, top_n=top_n)
    path = Path(report_path or CATEGORY_REPORT_PATH)

    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=REPORT_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)

    LOGGER.info("report: %d category rows → %s", len(rows), path)
    return len(rows)


# ---------------------------------------------------------------------------
# Standalone execution
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import sys

    from dotenv import load_dotenv

    from corpus import load_corpus

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    source = sys.argv[1] if len(sys.argv) > 1 else os.getenv("CORPUS_PATH", "data/vispubs.json")
    generate_category_report(load_corpus(source))
    print(f"Category report → {CATEGORY_REPORT_PATH}")
