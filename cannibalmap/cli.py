"""CLI entry point for cannibalmap."""

import argparse
import json
import logging
import sys
from pathlib import Path

from cannibalmap.config import load_config
from cannibalmap.ingest import load_snapshot
from cannibalmap.metrics import format_split_clicks, pulse_size, severity_tier
from cannibalmap.output.cluster_map import generate_cluster_map
from cannibalmap.output.share_bar import generate_share_bar
from cannibalmap.output.trend_chart import generate_trend_chart
from cannibalmap.view import ConflictMapView

logger = logging.getLogger(__name__)


def _parse_point(raw: str) -> tuple[float, float]:
    try:
        x, y = (float(v) for v in raw.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got {raw!r}")
    return x, y


def main() -> None:
    parser = argparse.ArgumentParser(description="Keyword cannibalization conflict map")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command")

    # render command
    render_parser = sub.add_parser("render", help="Render the cluster map (and trends for a clicked conflict)")
    render_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    render_parser.add_argument("snapshot", type=Path, help="JSON snapshot of conflicts")
    render_parser.add_argument("--out", type=Path, default=None, help="Output directory")
    render_parser.add_argument(
        "--click", type=_parse_point, action="append", default=[],
        help="Simulate a click at X,Y before rendering (repeatable)",
    )
    render_parser.add_argument("--width", type=int, default=None)
    render_parser.add_argument("--height", type=int, default=None)

    # stats command
    stats_parser = sub.add_parser("stats", help="Summarize conflicts in a snapshot")
    stats_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    stats_parser.add_argument("snapshot", type=Path, help="JSON snapshot of conflicts")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return

    config = load_config(args.config)

    try:
        snapshot = load_snapshot(args.snapshot)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logger.error("Could not load snapshot %s: %s", args.snapshot, e)
        sys.exit(1)

    if args.command == "render":
        if args.out is not None:
            config.output_dir = str(args.out.resolve())
        if args.width or args.height:
            config.plot.width = args.width or config.plot.width
            config.plot.height = args.height or config.plot.height

        view = ConflictMapView(config)
        view.load(snapshot.conflicts)
        for x, y in args.click:
            hit = view.on_pointer_down(x, y)
            print(f"click ({x:g}, {y:g}) -> {hit if hit is not None else 'miss'}")

        out_dir = config.resolved_output_dir
        out_dir.mkdir(parents=True, exist_ok=True)
        generate_cluster_map(
            view.conflicts, config, out_dir / "cluster_map.png", view.active_conflict_id,
        )
        active = view.active_conflict
        if active is not None:
            print(f"Active conflict: {active.id} {active.query!r}")
            generate_trend_chart(active, config, out_dir / "trends.png")
            generate_share_bar(active, config, out_dir / "share_bar.png")
        print(f"Output: {out_dir}")

    elif args.command == "stats":
        if not snapshot.conflicts:
            print("No conflicts in snapshot.")
            return
        for c in snapshot.conflicts:
            tier = severity_tier(c.severity)
            print(
                f"  {c.id}: {c.query!r} [{tier.name}] {c.status.value}, {len(c.pages)} pages, "
                f"{c.total_impressions:,} impressions, split {format_split_clicks(c)}, "
                f"volatility {c.volatility:.2f} (pulse {pulse_size(c.volatility, config.pulse):.1f}px)"
            )
            winner = f", winner {c.winner_url}" if c.winner_url else ""
            print(f"      primary {c.primary.url}{winner}")
            if c.recommendation:
                print(f"      recommendation: {c.recommendation}")
        if snapshot.skipped:
            print(f"\nSkipped {snapshot.skipped} invalid records")


if __name__ == "__main__":
    main()
