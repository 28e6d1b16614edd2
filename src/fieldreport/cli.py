"""fieldreport CLI — inspect the administrative hierarchy, the submission log and map points."""

import argparse
import asyncio
import logging
import sys

import mlflow

from fieldreport.config import settings
from fieldreport.core.types import Selection
from fieldreport.pipeline.ranking import FIELD_WEIGHTS, SearchMode, is_match
from fieldreport.state import AppState


def _init_mlflow() -> None:
    """Initialize MLflow tracking for the current process."""
    mlflow.set_tracking_uri(settings.mlflow_tracking_uri)
    mlflow.set_experiment(settings.mlflow_experiment_name)


def _state() -> AppState:
    return AppState(
        admin_csv_url=settings.admin_csv_url,
        logs_csv_url=settings.logs_csv_url,
        submit_url=settings.submit_url,
        region_allow_list=settings.allowed_regions,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fieldreport", description="Field report sheets")
    sub = parser.add_subparsers(dest="command", required=True)

    opts = sub.add_parser("options", help="List select options for a partial address")
    opts.add_argument("--region", default="")
    opts.add_argument("--province", default="")
    opts.add_argument("--commune", default="")

    logs = sub.add_parser("logs", help="Search the submission log")
    logs.add_argument("--mode", choices=[m.value for m in SearchMode], default=SearchMode.RANK.value)
    logs.add_argument("--q", default="", help="Free-text query (filter mode)")
    for field in FIELD_WEIGHTS:
        logs.add_argument(f"--{field}", default="", help=f"Substring of {field} (rank mode)")
    logs.add_argument("--limit", type=int, default=20)

    sub.add_parser("points", help="List plottable submissions")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run a fieldreport command: fieldreport {options,logs,points}"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    _init_mlflow()

    if args.command == "options":
        code = asyncio.run(_options(args))
    elif args.command == "logs":
        code = asyncio.run(_logs(args))
    else:
        code = asyncio.run(_points())
    sys.exit(code)


async def _options(args: argparse.Namespace) -> int:
    state = _state()
    await state.load_admin_data()
    if state.admin_error:
        print(f"Error: {state.admin_error}")
        return 1

    derived = state.options(Selection(args.region, args.province, args.commune))
    for label, values in (
        ("Regions", derived.regions),
        ("Provinces", derived.provinces),
        ("Communes", derived.communes),
        ("Douars", derived.douars),
    ):
        if values:
            print(f"{label} ({len(values)}):")
            for value in values:
                print(f"  {value}")
    if state.admin_warnings:
        print(f"\n{len(state.admin_warnings)} short rows in the sheet (missing cells left empty)")
    return 0


async def _logs(args: argparse.Namespace) -> int:
    state = _state()
    await state.refresh_logs()
    if state.logs_error:
        print(f"Error: {state.logs_error}")
        return 1

    filters = {field: getattr(args, field) for field in FIELD_WEIGHTS if getattr(args, field)}
    rows = state.search(filters, args.q, SearchMode(args.mode))
    print(f"{len(rows)} submissions ({args.mode})")
    print(f"{'=' * 50}")
    for row in rows[:args.limit]:
        marker = "*" if is_match(row, filters) else " "
        print(f"{marker} {row.region} / {row.province} / {row.commune} / {row.douar}")
        print(f"    Urgency: {row.urgency}   Phone: {row.phone}")
        if row.damage:
            print(f"    Damage:  {row.damage}")
        if row.needs:
            print(f"    Needs:   {row.needs}")
    return 0


async def _points() -> int:
    state = _state()
    await state.refresh_logs()
    if state.logs_error:
        print(f"Error: {state.logs_error}")
        return 1

    points = state.points()
    for p in points:
        tier = p.urgency.value if p.urgency else "UNKNOWN"
        print(f"{p.lat:.6f},{p.lng:.6f}  {tier:<8}  {p.row.douar}")
    skipped = len(state.logs) - len(points)
    if skipped:
        print(f"\n{skipped} submissions without a usable position")
    return 0
