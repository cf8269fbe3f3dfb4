"""Command-line report over a V8 profiler log file."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from jsprofile.api.engine import create_log_engine
from jsprofile.diagnostics.event import DiagnosticEvent
from jsprofile.diagnostics.report import command_breakdown, export_profile_json, format_debug_stats
from jsprofile.profile.model import JavaScriptProfile, TimelineRecord, state_to_string
from jsprofile.profile.node import ProfileNode
from jsprofile.runtime.config import load_engine_config
from jsprofile.runtime.errors import LogFormatError
from jsprofile.runtime.logging import setup_logging, shutdown_logging
from jsprofile.runtime.work_queue import RuntimeWorkQueue
from jsprofile.v8.engine import LogEngine

_LOG = logging.getLogger(__name__)

_DEFAULT_EVENT_LIMIT = 20


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jsprofile", description="Summarize a V8 profiler log.")
    parser.add_argument("log_file", type=Path, help="V8 profiler log (v8.log format).")
    parser.add_argument(
        "--chunked",
        action="store_true",
        help="Decode through the work queue in time slices instead of in one pass.",
    )
    parser.add_argument("--depth", type=int, default=8, help="Maximum tree depth to print.")
    parser.add_argument("--min-percent", type=float, default=0.5, help="Hide nodes below this share of samples.")
    parser.add_argument("--breakdown", action="store_true", help="Print record counts per command.")
    parser.add_argument(
        "--events",
        type=int,
        default=None,
        metavar="N",
        help="Collect decoder diagnostics and print the last N events.",
    )
    parser.add_argument("--json", type=Path, default=None, help="Write the profile as JSON to this path.")
    parser.add_argument("--log-level", default=None, help="Override JSPROFILE_LOG_LEVEL.")
    parser.add_argument("--log-file", default=None, help="Also write JSON logs to this file.")
    return parser


def run_log(
    payload: str,
    *,
    chunked: bool,
    diagnostics: bool = False,
) -> tuple[LogEngine, TimelineRecord, int]:
    """Decode `payload` into a fresh record; return engine, record and jobs run.

    Settings come from the environment; `chunked` overrides
    `JSPROFILE_USE_WORK_QUEUE` and `diagnostics` forces the hub on.
    """
    config = replace(load_engine_config(), use_work_queue=chunked)
    if diagnostics:
        config = replace(config, diagnostics_enabled=True)
    queue = RuntimeWorkQueue() if chunked else None
    engine = create_log_engine(config, work_queue=queue)
    record = TimelineRecord(sequence=1)
    engine.parse_raw_event(payload, record, record.profile)
    jobs = 1
    if queue is not None:
        jobs = queue.run_until_empty()
    return engine, record, jobs


def render_tree(root: ProfileNode, *, max_depth: int, min_percent: float) -> Tree:
    total = root.time or 1.0
    tree = Tree(f"[b]all samples[/] • {root.time:g}")

    def add(node: ProfileNode, branch: Tree, depth: int) -> None:
        if depth >= max_depth:
            return
        for child in sorted(node.children, key=lambda item: item.time, reverse=True):
            percent = child.time / total * 100.0
            if percent < min_percent:
                continue
            kind = f" [dim]{escape(child.symbol_type)}[/]" if child.symbol_type else ""
            label = (
                f"[bold]{escape(child.symbol_name)}[/]{kind} • "
                f"self {child.self_time:g} total {child.time:g} ({percent:.1f}%)"
            )
            add(child, branch.add(label), depth + 1)

    add(root, tree, 0)
    return tree


def render_states(profile: JavaScriptProfile) -> Table:
    table = Table(title="VM states")
    table.add_column("State")
    table.add_column("Samples", justify="right")
    table.add_column("%", justify="right")
    total = profile.total_time or 1.0
    for state, samples in sorted(profile.state_times.items()):
        table.add_row(state_to_string(state), f"{samples:g}", f"{samples / total * 100.0:.1f}")
    return table


def render_counts(title: str, counts: dict[str, int]) -> Table:
    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Count", justify="right")
    for name, count in counts.items():
        table.add_row(escape(name), str(count))
    return table


def render_events(events: list[DiagnosticEvent], *, dropped: int) -> Table:
    caption = f"{dropped} older events dropped" if dropped else None
    table = Table(title="Decoder events", caption=caption)
    table.add_column("Seq", justify="right", no_wrap=True)
    table.add_column("Level", no_wrap=True)
    table.add_column("Event", no_wrap=True)
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Message")
    for event in events:
        line = "" if event.line_number is None else str(event.line_number)
        table.add_row(str(event.sequence), event.level, event.short_name, line, escape(event.message))
    return table


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level_name=args.log_level, file_path=args.log_file)
    console = Console()
    try:
        payload = args.log_file.read_text(encoding="utf-8", errors="replace")
        try:
            engine, record, jobs = run_log(payload, chunked=args.chunked, diagnostics=args.events is not None)
        except LogFormatError as exc:
            _LOG.error("log_decode_failed path=%s line=%s: %s", args.log_file, exc.line_number, exc)
            return 1

        _LOG.info("log_decoded path=%s jobs=%d symbols=%d", args.log_file, jobs, len(engine.symbols))
        if args.breakdown:
            console.print(render_counts("Records per command", command_breakdown(payload)))
        root = record.profile.bottom_up_profile
        if root is None:
            console.print("[yellow]No ticks in log.[/]")
        else:
            console.print(render_tree(root, max_depth=args.depth, min_percent=args.min_percent))
            console.print(render_states(record.profile))
        console.print("[b]Debug stats[/]")
        console.print(format_debug_stats(engine.stats), markup=False, highlight=False)
        hub = engine.hub
        if hub is not None:
            limit = args.events if args.events is not None else _DEFAULT_EVENT_LIMIT
            console.print(render_events(hub.snapshot(limit=limit), dropped=hub.dropped))
        if args.json is not None:
            out = export_profile_json(record.profile, path=args.json, stats=engine.stats)
            console.print(f"Wrote {out}")
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
