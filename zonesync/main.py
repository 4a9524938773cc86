"""Command-line entrypoint for zonesync."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import yaml

from .catalog import ZoneCatalog, default_catalog
from .config import AppConfig, load_config
from .duration import DurationVector, Direction, difference, shift
from .errors import ZoneSyncError
from .formatting import format_long
from .logging_utils import configure_logging, get_logger
from .parsing import parse_datetime, parse_time_of_day
from .projection import to_instant
from .session import Session

DEFAULT_CONFIG_NAME = "zonesync.yml"

logger = get_logger("cli")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="zonesync")
    p.add_argument(
        "--config",
        type=Path,
        default=os.environ.get("ZONESYNC_CONFIG"),
        help="Path to config YAML (default: ./zonesync.yml when present, or ZONESYNC_CONFIG).",
    )
    p.add_argument("--log-level", default=None)
    p.add_argument("--log-dir", type=Path, default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    show = sub.add_parser("show", help="Show one instant across zones.")
    show.add_argument("--zone", action="append", default=[], help="Zone to show (repeatable).")
    show.add_argument("--at", help="Wall time YYYY-MM-DDTHH:MM[:SS] in the first zone.")
    show.add_argument("--12h", dest="twelve_hour", action="store_true")

    anchor = sub.add_parser("anchor", help="Reassign a zone while keeping its wall time.")
    anchor.add_argument("--from", dest="from_zone", required=True)
    anchor.add_argument("--to", dest="to_zone", required=True)
    anchor.add_argument("--time", required=True, help="Wall time HH:MM in the source zone.")
    anchor.add_argument("--zone", action="append", default=[], help="Other zones to display.")

    diff = sub.add_parser("diff", help="Calendar difference between two wall times.")
    diff.add_argument("start")
    diff.add_argument("end")

    shift_cmd = sub.add_parser("shift", help="Add or subtract a duration from a wall time.")
    shift_cmd.add_argument("start")
    for unit in ("years", "months", "days", "hours", "minutes", "seconds"):
        shift_cmd.add_argument(f"--{unit}", type=int, default=0)
    shift_cmd.add_argument("--subtract", action="store_true")

    zones = sub.add_parser("zones", help="List known zones with their labels.")
    zones.add_argument("--country", help="Only zones whose country contains this text.")

    sub.add_parser("print-config", help="Load config and print resolved values.")
    return p.parse_args(argv)


def _load(args: argparse.Namespace) -> AppConfig:
    if args.config is not None:
        return load_config(args.config)
    default_path = Path(DEFAULT_CONFIG_NAME)
    if default_path.exists():
        return load_config(default_path)
    return AppConfig()


def _session_for(config: AppConfig, zones: list[str]) -> Session:
    if zones:
        config = config.model_copy(deep=True)
        config.zones.initial = zones
    return Session(config)


def _print_views(session: Session) -> None:
    for view in session.views():
        date = f"  {view.date_text}" if view.date_text else ""
        print(f"{view.time_text:>8}{date}  [{view.day_night}]  {view.zone}  {view.label}")


def _cmd_show(args: argparse.Namespace, config: AppConfig) -> int:
    session = _session_for(config, args.zone)
    if args.twelve_hour:
        session.settings.use_24_hour = False
    if args.at:
        first = session.entries()[0]
        fields = parse_datetime(args.at)
        session.store.try_set(to_instant(fields, session.catalog.tzinfo_for(first.zone)))
    _print_views(session)
    return 0


def _cmd_anchor(args: argparse.Namespace, config: AppConfig) -> int:
    session = _session_for(config, [args.from_zone, *args.zone])
    anchor = session.entries()[0]
    parsed = parse_time_of_day(args.time)
    result = session.apply_time_edit(anchor.id, parsed.hour, parsed.minute, parsed.second or 0)
    if not result.ok:
        raise result.error
    print("Before:")
    _print_views(session)
    result = session.apply_zone_reassignment(anchor.id, args.to_zone)
    if not result.ok:
        raise result.error
    print("After:")
    _print_views(session)
    return 0


def _cmd_diff(args: argparse.Namespace, config: AppConfig) -> int:
    breakdown = difference(parse_datetime(args.start), parse_datetime(args.end))
    print(breakdown.render())
    return 0


def _cmd_shift(args: argparse.Namespace, config: AppConfig) -> int:
    vector = DurationVector(
        years=args.years,
        months=args.months,
        days=args.days,
        hours=args.hours,
        minutes=args.minutes,
        seconds=args.seconds,
    )
    direction = Direction.SUBTRACT if args.subtract else Direction.ADD
    print(format_long(shift(parse_datetime(args.start), vector, direction)))
    return 0


def _cmd_zones(args: argparse.Namespace, catalog: ZoneCatalog) -> int:
    needle = (args.country or "").lower()
    for item in catalog.options():
        if needle and needle not in item.country.lower():
            continue
        print(f"{item.zone:<32} {item.label}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = _load(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        configure_logging(level=args.log_level or "INFO")
        logger.error("Failed to load config: {}", exc)
        return 2
    configure_logging(
        log_dir=args.log_dir or config.logging.dir,
        level=args.log_level or config.logging.level,
    )

    try:
        if args.cmd == "show":
            return _cmd_show(args, config)
        if args.cmd == "anchor":
            return _cmd_anchor(args, config)
        if args.cmd == "diff":
            return _cmd_diff(args, config)
        if args.cmd == "shift":
            return _cmd_shift(args, config)
        if args.cmd == "zones":
            return _cmd_zones(args, default_catalog())
        print(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False), end="")
        return 0
    except ZoneSyncError as exc:
        logger.error("{}: {}", type(exc).__name__, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
