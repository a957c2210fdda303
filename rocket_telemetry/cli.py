from __future__ import annotations
from pathlib import Path
from typing import Optional, Sequence
import argparse
import logging

import matplotlib
matplotlib.use("Agg")   # figures are only written to disk here
import matplotlib.pyplot as plt

from .analyze import analyze
from .config import load_config, setup_logging
from .domain import DEFAULT_WINDOW, SummaryStatistics, TimeWindow
from .parse import records_to_frame
from .render import METRIC_GROUPS, make_metric_figure, make_performance_figure, stats_card_items, stats_title

logger = logging.getLogger(__name__)


def format_report(n_records: int, stats: Optional[SummaryStatistics], window: TimeWindow = DEFAULT_WINDOW) -> str:
    lines = [stats_title(window), f"Records in window: {n_records}", ""]
    if stats is None:
        lines.append("No telemetry rows inside the analysis window.")
        return "\n".join(lines) + "\n"

    for label, value in stats_card_items(stats):
        lines.append(f"  - {label}: {value}")

    inf = stats.inference_stats
    if inf is not None:
        lines.append("")
        lines.append("Inference time (μs):")
        lines.append(f"  min={inf.min:.2f} max={inf.max:.2f} avg={inf.avg:.2f} median={inf.median:.2f}")
    return "\n".join(lines) + "\n"


def save_plots(out_base: Path, records) -> list[Path]:
    frame = records_to_frame(records)
    paths: list[Path] = []

    figures = [(name, make_metric_figure(frame, group)) for name, group in METRIC_GROUPS.items()]
    figures.append(("performance", make_performance_figure(frame)))

    for name, fig in figures:
        out_path = out_base.with_name(f"{out_base.name}_{name}.png")
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
        paths.append(out_path)
    return paths


def _report(args: argparse.Namespace) -> int:
    config = args.config
    source = args.source or config.source
    logger.debug(f"Loading telemetry from {source}")

    result, err = analyze(source, timeout_s=config.timeout_s)
    if err or result is None:
        print(err or "Analysis failed (no result returned).")
        return 1

    records, stats = result
    report = format_report(len(records), stats)
    print(report, end="")

    if args.out:
        out_base = Path(args.out)
        out_base.parent.mkdir(parents=True, exist_ok=True)
        # append, not with_suffix: "flight.v2" must stay "flight.v2.txt" next to "flight.v2_*.png"
        report_path = out_base.with_name(out_base.name + ".txt")
        report_path.write_text(report, encoding="utf-8")
        plot_paths = save_plots(out_base, records)
        print(f"Report: {report_path}")
        print(f"Plots:  {len(plot_paths)} written next to {report_path.name}")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("rocket_telemetry.server:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rocket_telemetry", description="Rocket telemetry analysis")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print flight statistics, optionally write report + plots")
    report.add_argument("--source", type=str, default=None, help="CSV path or /api/telemetry URL (default: from env config)")
    report.add_argument("--out", type=str, default=None, help="Output base path (no extension)")
    report.set_defaults(func=_report)

    serve = sub.add_parser("serve", help="Run the HTTP endpoint")
    serve.add_argument("--host", type=str, default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=_serve)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    args.config = load_config()
    setup_logging(args.config.log_level, args.config.log_file)
    return args.func(args)
