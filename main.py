"""CLI entrypoint: load the corpus and network, replay interactions, export results.

Interactions are applied in a fixed order, the same order an analyst would
work top to bottom in the dashboard:

  filter bar → timeline (year / range) → network (author / region) → statistics
"""

from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from csv_sink import write_paper_set
from dashboard import Dashboard
from filters import GlobalFilter
from report import generate_category_report
from spatial_layout import Rect, Transform
from statistics_filter import STATISTICS_FIELDS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Explore a publication corpus from the command line")
    parser.add_argument("--corpus", default=os.getenv("CORPUS_PATH", "data/vispubs.json"), help="Publication corpus JSON")
    parser.add_argument("--network", default=os.getenv("NETWORK_PATH", "data/author_network.json"), help="Co-authorship network JSON")

    group = parser.add_argument_group("filter bar")
    group.add_argument("--title", default=None, help="Title keyword")
    group.add_argument("--author", default=None, help="Author name substring")
    group.add_argument("--conference", default=None)
    group.add_argument("--award", default=None)
    group.add_argument("--start-year", type=int, default=None)
    group.add_argument("--end-year", type=int, default=None)

    timeline = parser.add_mutually_exclusive_group()
    timeline.add_argument("--year", type=int, default=None, help="Timeline: click the first paper of this year")
    timeline.add_argument("--range", type=int, nargs=2, metavar=("START", "END"), default=None, help="Timeline: select an inclusive year range")

    network = parser.add_mutually_exclusive_group()
    network.add_argument("--author-node", default=None, help="Network: click the author node with this id")
    network.add_argument("--region", type=float, nargs=4, metavar=("X0", "Y0", "X1", "Y1"), default=None, help="Network: brush a screen-space rectangle")
    parser.add_argument("--zoom", type=float, nargs=3, metavar=("K", "TX", "TY"), default=None, help="Network viewing transform for --region")

    parser.add_argument(
        "--category",
        nargs=2,
        metavar=("CHART", "LABEL"),
        default=None,
        help=f"Statistics: click a bucket; CHART is one of {', '.join(STATISTICS_FIELDS)}",
    )
    parser.add_argument("--export", action="store_true", help="Write the current paper set to CSV")
    parser.add_argument("--report", action="store_true", help="Write the category summary report")
    args = parser.parse_args(argv)
    if args.zoom is not None:
        try:
            Transform(*args.zoom)
        except ValueError as exc:
            parser.error(f"--zoom: {exc}")
    return args


def _node_id(raw: str) -> int | str:
    return int(raw) if raw.lstrip("-").isdigit() else raw


def run(args: argparse.Namespace) -> Dashboard:
    """Build the dashboard and apply the requested interactions."""
    dashboard = Dashboard.from_files(args.corpus, args.network)
    logging.info("Loaded corpus=%s base=%s", len(dashboard.coordinator.corpus), len(dashboard.base))

    predicate = GlobalFilter(
        title=args.title,
        author=args.author,
        conference=args.conference,
        award=args.award,
        start_year=args.start_year,
        end_year=args.end_year,
    )
    if not predicate.is_empty:
        dashboard.submit_filter(predicate)
        logging.info("Filter bar: base=%s", len(dashboard.base))

    if args.year is not None:
        paper = next((p for p in dashboard.base if p.year == args.year), None)
        if paper is None:
            logging.warning("Timeline: no paper in %s", args.year)
        else:
            dashboard.click_timeline_point(paper)
    elif args.range is not None:
        dashboard.select_year_range(*args.range)

    if args.author_node is not None:
        dashboard.click_author(_node_id(args.author_node))
    elif args.region is not None:
        dashboard.toggle_network_mode()
        if args.zoom is not None:
            k, tx, ty = args.zoom
            dashboard.set_transform(Transform(k=k, x=tx, y=ty))
        dashboard.brush_network(Rect(*args.region))

    if args.category is not None:
        chart, label = args.category
        dashboard.statistics.set_chart(chart)
        dashboard.click_category(label)

    nodes, edges = dashboard.network_view()
    logging.info(
        "Settled: current=%s highlighted=%s detail=%s network_nodes=%s network_edges=%s",
        len(dashboard.current_papers),
        len(dashboard.highlighted),
        dashboard.detail.title if dashboard.detail else None,
        len(nodes),
        len(edges),
    )

    if args.export:
        write_paper_set(dashboard.current_papers, dashboard.highlighted)
    if args.report:
        generate_category_report(dashboard.current_papers)
    return dashboard


def main() -> None:
    """Initialize config and run the CLI."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args()
    dashboard = run(args)
    for paper in dashboard.detail_list()[:20]:
        print(f"{paper.year or '----'}  {paper.title}")


if __name__ == "__main__":
    main()
