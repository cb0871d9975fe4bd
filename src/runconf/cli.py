# runconf/cli.py
"""
runconf command line.

    runconf list                       supported runtimes
    runconf init java [--plain]        print a meta/run.yaml skeleton
    runconf resolve runconf.toml       persist boot commands for all packages
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .exceptions import RunconfError
from .load_config import build_registry, load_config
from .logging_config import setup_logging
from .runtime_registry import SUPPORTED_RUNTIMES, list_runtimes, render_manifest_template

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runconf", description="Resolve unikernel run manifests into boot commands"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List supported runtimes")

    init = sub.add_parser("init", help="Print a meta/run.yaml template")
    init.add_argument("runtime", choices=[k.value for k in SUPPORTED_RUNTIMES])
    init.add_argument("--plain", action="store_true", help="Omit help comments")

    resolve = sub.add_parser("resolve", help="Persist boot commands of all packages")
    resolve.add_argument("config", help="TOML project file")
    resolve.add_argument("--mpm-dir", help="Override the artifact directory")

    return parser


def _cmd_list(args: argparse.Namespace) -> int:
    width = max(len(kind.value) for kind, _ in list_runtimes())
    for kind, description in list_runtimes():
        print(f"{kind.value:<{width}}  {description}")
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    print(render_manifest_template(args.runtime, plain=args.plain), end="")
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    registry = build_registry(config)
    mpm_dir = args.mpm_dir or config.mpm_dir

    for item in registry.persist(mpm_dir):
        print(f"{item.package}:{item.name}: {item.boot_cmd}")

    run = registry.run_config(config.target_package, config.run_config_set)
    print(f"Boot with: {run.cmd}")
    return 0


COMMANDS = {
    "list": _cmd_list,
    "init": _cmd_init,
    "resolve": _cmd_resolve,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        return COMMANDS[args.command](args)
    except RunconfError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
