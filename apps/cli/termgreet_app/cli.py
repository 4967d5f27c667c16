"""CLI entrypoint for the termgreet greeting."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from termgreet_core import config_path, load_config, write_default_config
from termgreet_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from termgreet_display import OutputError, TerminalWriter
from termgreet_renderer import PATTERN_NAMES, InvalidGeometry, InvalidRenderConfig

from .app import run, show_motd


def cmd_write_config(args: argparse.Namespace) -> int:
    path = Path(args.config).expanduser() if args.config else config_path()
    if path.exists():
        print(f"config already exists: {path}", file=sys.stderr)
        return 1
    print(write_default_config(path))
    return 0


def cmd_motd(args: argparse.Namespace) -> int:
    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    try:
        show_motd(cfg, TerminalWriter())
    except OutputError as exc:
        get_logger().error(str(exc), extra={"event": "output_failed"})
        return 1
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    cfg = load_config(Path(args.config).expanduser() if args.config else None)
    if args.layout:
        cfg.display.layout = args.layout
    try:
        run(cfg, show_image=not args.no_image, test_pattern=args.test_pattern)
    except (InvalidGeometry, InvalidRenderConfig) as exc:
        get_logger().error(f"invalid configuration: {exc}", extra={"event": "config_invalid"})
        print(f"termgreet: invalid configuration: {exc}", file=sys.stderr)
        return 2
    except OutputError as exc:
        get_logger().error(str(exc), extra={"event": "output_failed"})
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termgreet", description="A configurable system information greeting")
    parser.add_argument("-c", "--config", default=None, help="Path to config file")
    parser.add_argument("-m", "--motd", action="store_true", help="Show MOTD only")
    parser.add_argument("--no-image", action="store_true", help="Disable image display")
    parser.add_argument("--layout", choices=["vertical", "horizontal"], default=None, help="Override the configured layout")
    parser.add_argument("--test-pattern", choices=list(PATTERN_NAMES), default=None, help="Render a synthetic image")
    parser.add_argument("--write-config", action="store_true", help="Write a commented default config file and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(console=args.verbose)
    install_crash_hooks()

    if args.write_config:
        return cmd_write_config(args)
    if args.motd:
        return cmd_motd(args)
    return cmd_show(args)


if __name__ == "__main__":
    raise SystemExit(main())
